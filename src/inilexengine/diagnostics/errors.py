"""Language exception hierarchy with structured diagnostics.

Only construction-time metadata failures and explicit validation of a
missing file are errors. Missing keys and missing or malformed resource
files degrade to fallback values and never raise.

Hierarchy:
    LanguageError
    ├─ MetadataError
    │  ├─ MetadataNotFoundError
    │  └─ MetadataInvalidError
    ├─ ResourceFileError (also FileNotFoundError)
    └─ IniSyntaxError (also ValueError)

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LanguageError(Exception):
    """Base exception for all language resolution errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LanguageError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MetadataError(LanguageError):
    """Language metadata could not be resolved.

    Fatal to resolver construction. A cache never stores a resolver for a
    key whose construction raised this error.
    """


class MetadataNotFoundError(MetadataError):
    """metadata.json is absent or not readable."""


class MetadataInvalidError(MetadataError):
    """metadata.json is not a JSON object or lacks a required field."""


class ResourceFileError(LanguageError, FileNotFoundError):
    """A resource file explicitly requested for validation does not exist."""


class IniSyntaxError(LanguageError, ValueError):
    """Resource source text violates the INI grammar.

    Raised by the strict string parser. File-level parsing catches it and
    returns an empty mapping, so resolution treats such a file as absent.

    Attributes:
        line: 1-based line number where parsing stopped (0 if unknown)
    """

    def __init__(self, message: str | Diagnostic, line: int = 0) -> None:
        """Initialize IniSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            line: 1-based line number of the offending line
        """
        super().__init__(message)
        self.line = line
