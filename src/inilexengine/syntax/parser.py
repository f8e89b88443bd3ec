"""INI resource parser.

Parses language resource files of the form::

    ; comment
    [Section]
    KEY_ONE = "Translated text"
    KEY_TWO="Text with \\"quotes\\"" ; trailing comment

into a flat mapping of upper-cased keys to raw string values. Sections are
accepted and ignored; all keys share one namespace and later duplicates
win.

Grammar follows the behaviour of the INI scanner the resource files were
written for:
    - A leading UTF-8 BOM is ignored
    - Blank lines and lines starting with ';' are comments
    - Quoted values may span lines; '\\"' inside quotes is a literal quote
    - Other backslash sequences are kept verbatim (translation decides
      whether to interpret them)
    - Unquoted values are trimmed, lose inline ';' comments, and bare
      boolean-like words are cast (yes/on/true -> "1", no/off/false/none/
      null -> "")
    - Reserved words cannot be used as keys

A grammar violation anywhere makes the whole source invalid: the strict
string parser raises IniSyntaxError, the file parser returns {}.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from inilexengine.constants import RESERVED_INI_WORDS
from inilexengine.diagnostics import Diagnostic, DiagnosticCode, IniSyntaxError

if TYPE_CHECKING:
    from os import PathLike

__all__ = ["parse_ini_file", "parse_ini_string"]

logger = logging.getLogger(__name__)

_BOM: str = "\ufeff"

_TRUE_WORDS: frozenset[str] = frozenset(("YES", "ON", "TRUE"))
_FALSE_WORDS: frozenset[str] = frozenset(("NO", "OFF", "FALSE", "NONE", "NULL"))


def _syntax_error(message: str, line: int) -> IniSyntaxError:
    diagnostic = Diagnostic(
        code=DiagnosticCode.RESOURCE_SYNTAX_ERROR,
        message=message,
        line=line,
    )
    return IniSyntaxError(diagnostic, line=line)


def _scan_quoted(lines: list[str], index: int, start: str) -> tuple[str, str, int]:
    """Scan a double-quoted value starting just after the opening quote.

    Args:
        lines: All source lines
        index: Index of the line holding the opening quote
        start: Remainder of that line after the opening quote

    Returns:
        Tuple of (value, text after closing quote, index of closing line)

    Raises:
        IniSyntaxError: If the closing quote is never found
    """
    chunks: list[str] = []
    current = start
    while True:
        pos = 0
        while pos < len(current):
            char = current[pos]
            if char == "\\" and current[pos + 1 : pos + 2] == '"':
                chunks.append('"')
                pos += 2
                continue
            if char == '"':
                return "".join(chunks), current[pos + 1 :], index
            chunks.append(char)
            pos += 1
        index += 1
        if index >= len(lines):
            msg = "Unterminated quoted value"
            raise _syntax_error(msg, index)
        chunks.append("\n")
        current = lines[index]


def _cast_bare_value(raw: str) -> str:
    """Apply the scanner's cast for unquoted values."""
    value = raw.split(";", 1)[0].strip()
    upper = value.upper()
    if upper in _TRUE_WORDS:
        return "1"
    if upper in _FALSE_WORDS:
        return ""
    return value


def parse_ini_string(source: str) -> dict[str, str]:
    """Parse INI resource source text.

    Args:
        source: Resource file contents

    Returns:
        Mapping of upper-cased keys to string values, in file order

    Raises:
        IniSyntaxError: On any grammar violation

    Example:
        >>> parse_ini_string('hello = "Hello"\\n; note\\n[Group]\\nbye="Bye"')
        {'HELLO': 'Hello', 'BYE': 'Bye'}
    """
    if source.startswith(_BOM):
        source = source[len(_BOM) :]

    lines = source.splitlines()
    strings: dict[str, str] = {}
    index = 0

    while index < len(lines):
        line = lines[index].strip()
        line_number = index + 1

        if not line or line.startswith(";"):
            index += 1
            continue

        if line.startswith("["):
            if "]" not in line:
                msg = f"Unterminated section header: {line!r}"
                raise _syntax_error(msg, line_number)
            index += 1
            continue

        if "=" not in line:
            msg = f"Expected KEY = value, got {line!r}"
            raise _syntax_error(msg, line_number)

        raw_key, raw_value = line.split("=", 1)
        key = raw_key.strip().upper()
        if not key:
            msg = "Empty key"
            raise _syntax_error(msg, line_number)
        if key in RESERVED_INI_WORDS:
            msg = f"Reserved word used as key: {key}"
            raise _syntax_error(msg, line_number)

        raw_value = raw_value.strip()
        if raw_value.startswith('"'):
            value, rest, index = _scan_quoted(lines, index, raw_value[1:])
            rest = rest.strip()
            if rest and not rest.startswith(";"):
                msg = f"Unexpected content after quoted value: {rest!r}"
                raise _syntax_error(msg, index + 1)
        else:
            value = _cast_bare_value(raw_value)

        strings[key] = value
        index += 1

    return strings


def parse_ini_file(path: str | PathLike[str]) -> dict[str, str]:
    """Parse an INI resource file.

    Never raises for bad input: a missing, unreadable, undecodable or
    syntactically invalid file yields an empty mapping.

    Args:
        path: Resource file path

    Returns:
        Mapping of upper-cased keys to string values, or {} on any failure
    """
    file_path = Path(path)
    if not file_path.is_file():
        return {}

    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read resource file %s: %s", file_path, e)
        return {}

    try:
        return parse_ini_string(source)
    except IniSyntaxError as e:
        logger.warning("Invalid resource file %s (line %d): %s", file_path, e.line, e)
        return {}
