"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by
LanguageError exceptions and line-level validation findings.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Metadata errors (fatal at resolver construction)
        2000-2999: Resource file errors
        3000-3999: Resource validation findings (debug mode)
    """

    # Metadata errors (1000-1999)
    METADATA_NOT_FOUND = 1001
    METADATA_INVALID_JSON = 1002
    METADATA_NOT_OBJECT = 1003
    METADATA_FIELD_MISSING = 1004

    # Resource file errors (2000-2999)
    RESOURCE_NOT_FOUND = 2001
    RESOURCE_UNREADABLE = 2002
    RESOURCE_SYNTAX_ERROR = 2003

    # Validation findings (3000-3999)
    VALIDATION_UNBALANCED_QUOTES = 3001
    VALIDATION_MALFORMED_LINE = 3002
    VALIDATION_RESERVED_KEY = 3003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        path: File the diagnostic refers to (optional)
        line: 1-based line number (validation findings only)
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    path: str | None = None
    line: int | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[METADATA_NOT_FOUND]: Language metadata file not found
              --> /srv/app/language/fr-FR/metadata.json
              = help: Create metadata.json for the language

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.path is not None:
            location = _escape(self.path)
            if self.line is not None:
                location += f":{self.line}"
            lines.append(f"  --> {location}")
        if self.hint:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape control characters so a diagnostic stays on its own lines."""
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\x1b", "\\x1b")
