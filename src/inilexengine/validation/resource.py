"""Line-level resource file validation.

Re-reads the raw lines of an INI resource file and flags the mistakes
that make the INI scanner drop the whole file or silently change a value.
Resolution never depends on these findings; they exist for translators
and for the debug-mode error-file report.

Rules, applied per non-comment, non-section line (first failing rule wins):
    1. Odd number of double quotes (escaped \\" ignored)
    2. Line does not match KEY = "value" with an optional ; comment, where
       KEY starts with an upper-case letter followed by A-Z 0-9 _ : * - .
    3. KEY is a reserved INI word (YES, NO, NULL, ...)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from inilexengine.constants import RESERVED_INI_WORDS
from inilexengine.diagnostics import Diagnostic, DiagnosticCode, ResourceFileError

if TYPE_CHECKING:
    from os import PathLike

__all__ = ["validate_resource_file", "validate_resource_lines"]

logger = logging.getLogger(__name__)

_SECTION_LINE = re.compile(r"^\[[^\]]*\](\s*;.*)?$")
_STRING_LINE = re.compile(r'^[A-Z][A-Z0-9_:*\-.]*\s*=\s*".*"(\s*;.*)?$')


def _check_line(line: str, line_number: int, path: str | None) -> Diagnostic | None:
    """Apply the rule set to one stripped, non-comment line."""
    line = line.replace('\\"', "")

    if line.count('"') % 2 != 0:
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_UNBALANCED_QUOTES,
            message="Odd number of double quotes",
            path=path,
            line=line_number,
            hint='Escape literal quotes as \\"',
        )

    if not _STRING_LINE.match(line):
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_MALFORMED_LINE,
            message='Line does not match KEY = "value"',
            path=path,
            line=line_number,
            hint="Keys are upper-case and values must be double-quoted",
        )

    key = line.split("=", 1)[0].strip().upper()
    if key in RESERVED_INI_WORDS:
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_RESERVED_KEY,
            message=f"Reserved word used as key: {key}",
            path=path,
            line=line_number,
        )

    return None


def validate_resource_lines(
    lines: Iterable[str],
    *,
    path: str | None = None,
) -> tuple[Diagnostic, ...]:
    """Validate raw resource lines.

    Args:
        lines: Raw file lines (line endings allowed)
        path: File path attached to each diagnostic (optional)

    Returns:
        One Diagnostic per offending line, in file order; line numbers are
        1-based

    Example:
        >>> [d.line for d in validate_resource_lines(['A = "ok"', 'FOO = bar'])]
        [2]
    """
    findings: list[Diagnostic] = []

    for index, raw in enumerate(lines):
        line = raw.removeprefix("\ufeff") if index == 0 else raw
        line = line.strip()

        if not line or line.startswith(";"):
            continue
        if _SECTION_LINE.match(line):
            continue

        finding = _check_line(line, index + 1, path)
        if finding is not None:
            findings.append(finding)

    return tuple(findings)


def validate_resource_file(path: str | PathLike[str]) -> tuple[Diagnostic, ...]:
    """Validate a resource file on disk.

    Args:
        path: Resource file path

    Returns:
        Diagnostics for offending lines (empty if the file is clean)

    Raises:
        ResourceFileError: If the file does not exist
    """
    file_path = Path(path)
    if not file_path.is_file():
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message=f'Unable to locate file "{file_path}" for debugging',
            path=str(file_path),
        )
        raise ResourceFileError(diagnostic)

    with file_path.open(encoding="utf-8", errors="replace") as handle:
        findings = validate_resource_lines(handle, path=str(file_path))

    if findings:
        logger.warning(
            "Resource file %s has %d invalid line(s): %s",
            file_path,
            len(findings),
            ", ".join(str(d.line) for d in findings),
        )
    return findings
