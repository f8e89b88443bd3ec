"""Diagnostic system for language resolution errors.

Provides structured error diagnostics with codes, paths and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    IniSyntaxError,
    LanguageError,
    MetadataError,
    MetadataInvalidError,
    MetadataNotFoundError,
    ResourceFileError,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "IniSyntaxError",
    "LanguageError",
    "MetadataError",
    "MetadataInvalidError",
    "MetadataNotFoundError",
    "ResourceFileError",
]
