"""Resource file loading infrastructure for Language.

Provides the parser seam, the candidate-file rules for an extension and
the load record that lets repeated load() calls skip files whose outcome
is already known.

Components:
    ResourceFileLoader - Protocol for parsing one resource file
    IniFileLoader - Default loader backed by the INI parser
    candidate_files - Ordered file candidates for (extension, path, tag)
    LoadRecord - extension -> file -> outcome memo

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from inilexengine.constants import RESOURCE_FILE_SUFFIX, SYSTEM_EXTENSION
from inilexengine.localization.helpers import get_language_path
from inilexengine.syntax import parse_ini_file

if TYPE_CHECKING:
    from os import PathLike

    from inilexengine.localization.types import Extension, LanguageTag

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceFileLoader",
    # Concrete loader
    "IniFileLoader",
    # Candidate rules
    "candidate_files",
    "is_system_extension",
    # Load tracking
    "LoadRecord",
]


class ResourceFileLoader(Protocol):
    """Protocol for parsing one language resource file.

    Implementations must never raise for a missing or malformed file:
    both are reported as an empty mapping. Keys must be upper-cased.

    Example:
        >>> class CountingLoader:
        ...     def __init__(self) -> None:
        ...         self.calls: list[Path] = []
        ...     def parse(self, path: Path) -> Mapping[str, str]:
        ...         self.calls.append(path)
        ...         return IniFileLoader().parse(path)
        >>> language = Language(factory, "en-GB", loader=CountingLoader())
    """

    def parse(self, path: Path) -> Mapping[str, str]:
        """Parse a resource file.

        Args:
            path: Resource file path (may not exist)

        Returns:
            Upper-cased keys to raw strings; empty if absent or unparsable
        """
        ...


@dataclass(frozen=True, slots=True)
class IniFileLoader:
    """Default ResourceFileLoader backed by the INI parser."""

    def parse(self, path: Path) -> Mapping[str, str]:
        """Parse an INI resource file; {} if absent or invalid."""
        return parse_ini_file(path)


def is_system_extension(extension: Extension) -> bool:
    """True for the extension whose files are system.ini / <tag>.ini."""
    return extension in (SYSTEM_EXTENSION, "")


def candidate_files(
    extension: Extension,
    base_path: str | PathLike[str],
    tag: LanguageTag,
) -> tuple[Path, Path]:
    """Return the files load() tries for an extension, in order.

    The language-agnostic name comes first; the tag-qualified name is the
    fallback.

    Args:
        extension: Extension name ("system" or "" for the system strings)
        base_path: Application base directory
        tag: Language tag

    Returns:
        Two candidate paths inside base_path/language/<tag>

    Example:
        >>> candidate_files("com_users", "/srv/app", "fr-FR")
        (PosixPath('/srv/app/language/fr-FR/com_users.ini'),
         PosixPath('/srv/app/language/fr-FR/fr-FR.com_users.ini'))
    """
    directory = get_language_path(base_path, tag)
    if is_system_extension(extension):
        return (
            directory / f"{SYSTEM_EXTENSION}{RESOURCE_FILE_SUFFIX}",
            directory / f"{tag}{RESOURCE_FILE_SUFFIX}",
        )
    return (
        directory / f"{extension}{RESOURCE_FILE_SUFFIX}",
        directory / f"{tag}.{extension}{RESOURCE_FILE_SUFFIX}",
    )


class LoadRecord:
    """Memo of attempted resource files and their outcomes.

    Maps extension name -> file path -> outcome, where True means the file
    contributed strings and False means it was absent, unreadable or
    empty. Entries are only ever added or overwritten (by a forced
    reload); nothing is removed.

    Not thread-safe on its own: the owning Language serializes access.
    """

    __slots__ = ("_paths",)

    def __init__(self) -> None:
        """Initialize an empty record."""
        self._paths: dict[Extension, dict[str, bool]] = {}

    def get(self, extension: Extension, path: str | PathLike[str]) -> bool | None:
        """Return the recorded outcome, or None if never attempted."""
        return self._paths.get(extension, {}).get(str(path))

    def record(self, extension: Extension, path: str | PathLike[str], outcome: bool) -> None:
        """Record the outcome of parsing a file for an extension."""
        self._paths.setdefault(extension, {})[str(path)] = outcome

    def for_extension(self, extension: Extension) -> dict[str, bool]:
        """Copy of the file outcomes for one extension ({} if none)."""
        return dict(self._paths.get(extension, {}))

    def as_dict(self) -> dict[Extension, dict[str, bool]]:
        """Deep copy of the whole record."""
        return {extension: dict(files) for extension, files in self._paths.items()}

    def __len__(self) -> int:
        """Number of recorded (extension, file) pairs."""
        return sum(len(files) for files in self._paths.values())
