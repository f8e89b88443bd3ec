"""Per-language metadata records.

Each language directory carries a metadata.json describing the language
itself rather than its strings::

    {
        "name": "English (United Kingdom)",
        "tag": "en-GB",
        "rtl": false,
        "locale": ["en_GB.utf8", "en_GB.UTF-8", "en_GB", "english-uk"],
        "firstDay": 1,
        "weekEnd": "0,6",
        "calendar": "gregorian"
    }

"name" and "tag" are required; every other field has a default. Unknown
fields are preserved and reachable through LanguageMetadata.get().

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from inilexengine.constants import DEFAULT_CALENDAR, DEFAULT_FIRST_DAY, DEFAULT_WEEKEND
from inilexengine.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    MetadataInvalidError,
    MetadataNotFoundError,
)

if TYPE_CHECKING:
    from os import PathLike

__all__ = ["LanguageMetadata", "parse_metadata_file"]

_REQUIRED_FIELDS: tuple[str, ...] = ("name", "tag")
_FALSE_STRINGS: frozenset[str] = frozenset(("", "0", "false", "no", "off"))


@dataclass(frozen=True, slots=True)
class LanguageMetadata:
    """Immutable metadata for one language.

    Attributes:
        name: Display name
        tag: RFC language tag string
        rtl: True for right-to-left scripts
        calendar: Calendar name
        locale: System locale names, or None if not declared
        first_day: First day of the week (0 = Sunday)
        weekend: Weekend days as a comma-separated string
        raw: The full decoded record, read-only
    """

    name: str
    tag: str
    rtl: bool = False
    calendar: str = DEFAULT_CALENDAR
    locale: tuple[str, ...] | None = None
    first_day: int = DEFAULT_FIRST_DAY
    weekend: str = DEFAULT_WEEKEND
    raw: Mapping[str, object] = field(default_factory=dict, compare=False, repr=False)

    def get(self, prop: str, default: object = None) -> object:
        """Get a raw metadata property, or default if absent or null."""
        value = self.raw.get(prop)
        return default if value is None else value

    @classmethod
    def from_mapping(cls, data: Mapping[str, object], *, path: str | None = None) -> LanguageMetadata:
        """Build metadata from a decoded JSON object.

        Args:
            data: Decoded metadata.json contents
            path: Source path for diagnostics (optional)

        Returns:
            LanguageMetadata

        Raises:
            MetadataInvalidError: If a required field is missing or a field
                has the wrong type
        """
        for name in _REQUIRED_FIELDS:
            if not isinstance(data.get(name), str) or not data[name]:
                raise _invalid(
                    DiagnosticCode.METADATA_FIELD_MISSING,
                    f"Language metadata field '{name}' is missing or not a string",
                    path,
                )

        try:
            first_day = int(data.get("firstDay", DEFAULT_FIRST_DAY) or 0)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            raise _invalid(
                DiagnosticCode.METADATA_FIELD_MISSING,
                f"Language metadata field 'firstDay' is not an integer: {data.get('firstDay')!r}",
                path,
            ) from None

        return cls(
            name=str(data["name"]),
            tag=str(data["tag"]),
            rtl=_as_bool(data.get("rtl", False)),
            calendar=str(data.get("calendar") or DEFAULT_CALENDAR),
            locale=_as_locale_list(data.get("locale")),
            first_day=first_day,
            weekend=str(data.get("weekEnd") or DEFAULT_WEEKEND),
            raw=MappingProxyType(dict(data)),
        )


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _as_locale_list(value: object) -> tuple[str, ...] | None:
    match value:
        case None:
            return None
        case str():
            names = tuple(part.strip() for part in value.split(",") if part.strip())
            return names or None
        case list() | tuple():
            return tuple(str(item) for item in value)
        case _:
            return None


def _invalid(code: DiagnosticCode, message: str, path: str | None) -> MetadataInvalidError:
    return MetadataInvalidError(Diagnostic(code=code, message=message, path=path))


def parse_metadata_file(path: str | PathLike[str]) -> LanguageMetadata:
    """Read and validate a metadata.json file.

    Args:
        path: Path to metadata.json

    Returns:
        LanguageMetadata

    Raises:
        MetadataNotFoundError: If the file is absent or unreadable
        MetadataInvalidError: If the file is not a valid metadata object
    """
    file_path = Path(path)
    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.METADATA_NOT_FOUND,
            message=f"Language metadata file not found or not readable: {e}",
            path=str(file_path),
            hint="Every language directory needs a metadata.json",
        )
        raise MetadataNotFoundError(diagnostic) from e

    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise _invalid(
            DiagnosticCode.METADATA_INVALID_JSON,
            f'Language metadata file "{file_path}" contains invalid JSON: {e.msg}',
            str(file_path),
        ) from e

    if not isinstance(data, dict):
        raise _invalid(
            DiagnosticCode.METADATA_NOT_OBJECT,
            f"Language metadata must be a JSON object, got {type(data).__name__}",
            str(file_path),
        )

    return LanguageMetadata.from_mapping(data, path=str(file_path))
