"""Override patches: final-precedence translations per language.

Site owners customise wording without editing shipped language packs by
dropping ``language/overrides/<tag>.override.ini`` next to them. The
patch is read once when a Language is constructed and re-applied after
every extension load, so no later load can shadow an overridden key.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, MutableMapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from inilexengine.constants import OVERRIDE_FILE_SUFFIX, OVERRIDES_DIRNAME
from inilexengine.localization.helpers import get_language_path

if TYPE_CHECKING:
    from os import PathLike

    from inilexengine.localization.types import LanguageTag

__all__ = ["OverrideResolver", "override_file"]

logger = logging.getLogger(__name__)


def override_file(base_path: str | PathLike[str], tag: LanguageTag) -> Path:
    """Return the override file path for a tag.

    Example:
        >>> override_file("/srv/app", "en-GB")
        PosixPath('/srv/app/language/overrides/en-GB.override.ini')
    """
    return get_language_path(base_path) / OVERRIDES_DIRNAME / f"{tag}{OVERRIDE_FILE_SUFFIX}"


class OverrideResolver:
    """Loads and applies one language's override patch.

    The patch starts empty and is replaced by load(). Parsing goes through
    the owning Language so debug-mode validation and key normalization
    apply to override files too.
    """

    __slots__ = ("_parse", "_patch", "_source")

    def __init__(self, parse: Callable[[Path], Mapping[str, str]]) -> None:
        """Initialize with an empty patch.

        Args:
            parse: Resource file parser returning upper-cased keys
        """
        self._parse = parse
        self._patch: Mapping[str, str] = MappingProxyType({})
        self._source: Path | None = None

    def load(
        self,
        base_path: str | PathLike[str],
        tag: LanguageTag,
        *,
        default_tag: LanguageTag,
        debug: bool,
    ) -> Mapping[str, str]:
        """Load the override patch for tag.

        Outside debug mode, a non-default language first reads the default
        language's override file and discards the result, so any caching
        in the loader is warm for the resolvers that follow. That read
        never affects this patch.

        Args:
            base_path: Application base directory
            tag: Language whose overrides become the patch
            default_tag: The configured default language
            debug: Debug mode flag

        Returns:
            The loaded patch (read-only)
        """
        if not debug and tag != default_tag:
            self._parse(override_file(base_path, default_tag))

        self._source = override_file(base_path, tag)
        self._patch = MappingProxyType(dict(self._parse(self._source)))
        if self._patch:
            logger.debug("Loaded %d override(s) from %s", len(self._patch), self._source)
        return self._patch

    def apply(self, strings: MutableMapping[str, str]) -> None:
        """Write the patch over a string table in place."""
        strings.update(self._patch)

    @property
    def patch(self) -> Mapping[str, str]:
        """The current override patch (read-only)."""
        return self._patch

    @property
    def source(self) -> Path | None:
        """The override file the patch was read from, if loaded."""
        return self._source
