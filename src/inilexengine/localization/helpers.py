"""Filesystem helpers for language directories.

Path construction, installed-language discovery and writing resource
files. Resolution itself only needs get_language_path(); the rest serve
administration tooling (language pickers, translation editors).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from inilexengine.constants import LANGUAGE_DIRNAME, METADATA_FILENAME
from inilexengine.diagnostics import MetadataError
from inilexengine.localization.metadata import LanguageMetadata, parse_metadata_file
from inilexengine.syntax import serialize_ini

if TYPE_CHECKING:
    from os import PathLike

    from inilexengine.localization.types import LanguageTag

__all__ = [
    "get_known_languages",
    "get_language_path",
    "language_exists",
    "parse_language_files",
    "save_to_ini_file",
]

logger = logging.getLogger(__name__)

# Directory names that look like language tags: xx-XX or xxx-XX.
_TAG_DIRECTORY = re.compile(r"^[a-z]{2,3}-[A-Z]{2}$")

_exists_cache: dict[Path, bool] = {}
_exists_lock = threading.Lock()


def get_language_path(base_path: str | PathLike[str], tag: LanguageTag | None = None) -> Path:
    """Return the language directory, or the directory for one tag.

    Example:
        >>> get_language_path("/srv/app", "en-GB")
        PosixPath('/srv/app/language/en-GB')
        >>> get_language_path("/srv/app")
        PosixPath('/srv/app/language')
    """
    path = Path(base_path) / LANGUAGE_DIRNAME
    return path / tag if tag else path


def language_exists(tag: LanguageTag, base_path: str | PathLike[str]) -> bool:
    """Check whether a language directory exists.

    Results are memoised per directory for the process lifetime; a
    language installed after the first check for it is not seen.

    Args:
        tag: Language tag
        base_path: Application base directory

    Returns:
        True if base_path/language/<tag> is a directory
    """
    if not tag:
        return False

    path = get_language_path(base_path, tag)
    with _exists_lock:
        cached = _exists_cache.get(path)
        if cached is None:
            cached = path.is_dir()
            _exists_cache[path] = cached
    return cached


def parse_language_files(directory: str | PathLike[str]) -> dict[LanguageTag, LanguageMetadata]:
    """Find installed languages in a language directory.

    Only subdirectories named like a language tag and holding a valid
    metadata.json are reported; broken metadata is logged and skipped.

    Args:
        directory: The language directory (base/language)

    Returns:
        Mapping of tag (directory name) to its metadata, sorted by tag
    """
    root = Path(directory)
    languages: dict[LanguageTag, LanguageMetadata] = {}

    if not root.is_dir():
        return languages

    for child in sorted(root.iterdir()):
        if not child.is_dir() or not _TAG_DIRECTORY.match(child.name):
            continue
        metadata_file = child / METADATA_FILENAME
        if not metadata_file.is_file():
            continue
        try:
            languages[child.name] = parse_metadata_file(metadata_file)
        except MetadataError as e:
            logger.warning("Skipping language %s: %s", child.name, e)

    return languages


def get_known_languages(base_path: str | PathLike[str]) -> dict[LanguageTag, LanguageMetadata]:
    """Return the languages installed under an application base path."""
    return parse_language_files(get_language_path(base_path))


def save_to_ini_file(path: str | PathLike[str], strings: Mapping[str, str]) -> bool:
    """Write strings to an INI resource file.

    Args:
        path: Destination file (parent directories must exist)
        strings: Keys to translated strings

    Returns:
        True if the file was written, False on an I/O error

    Raises:
        ValueError: If a value cannot be written (see serialize_ini)
    """
    file_path = Path(path)
    try:
        file_path.write_text(serialize_ini(strings), encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to write resource file %s: %s", file_path, e)
        return False
    return True
