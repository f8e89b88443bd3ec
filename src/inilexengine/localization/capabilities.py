"""Optional per-language localisation capabilities.

Some languages need behaviour that cannot be expressed as strings:
transliteration for URL slugs, plural-suffix selection for counted
messages, search tuning. A language pack supplies these as a
LanguageCapabilities record registered against its tag; any slot left
as None falls back to the engine default.

Defaults when a slot is absent:
    transliterate                       identity
    plural_suffixes(count)              [str(count)]
    ignored_search_words()              []
    lower_limit_search_word()           3
    upper_limit_search_word()           200 (also the minimum)
    search_displayed_characters_number  200

Python 3.13+. External dependency: Babel (babel_plural_suffixes only).
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass

from inilexengine.locale_utils import get_babel_locale
from inilexengine.localization.types import LanguageTag

__all__ = [
    "CapabilityRegistry",
    "LanguageCapabilities",
    "babel_plural_suffixes",
]


@dataclass(frozen=True, slots=True)
class LanguageCapabilities:
    """Named function slots a language pack may provide.

    Attributes:
        transliterate: Map text to an ASCII-friendly form
        plural_suffixes: Key suffixes to try for a count, most specific first
        ignored_search_words: Words to drop from search queries
        lower_limit_search_word: Minimum search word length
        upper_limit_search_word: Maximum search word length
        search_displayed_characters_number: Characters shown per search hit
    """

    transliterate: Callable[[str], str] | None = None
    plural_suffixes: Callable[[int], list[str]] | None = None
    ignored_search_words: Callable[[], list[str]] | None = None
    lower_limit_search_word: Callable[[], int] | None = None
    upper_limit_search_word: Callable[[], int] | None = None
    search_displayed_characters_number: Callable[[], int] | None = None


class CapabilityRegistry:
    """Thread-safe mapping of language tags to their capabilities.

    Example:
        >>> registry = CapabilityRegistry()
        >>> registry.register("ru-RU", LanguageCapabilities(
        ...     plural_suffixes=babel_plural_suffixes("ru-RU"),
        ... ))
        >>> registry.get("ru-RU").plural_suffixes(3)
        ['few']
        >>> registry.get("xx-XX")
        LanguageCapabilities(transliterate=None, ...)
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: dict[LanguageTag, LanguageCapabilities] = {}
        self._lock = threading.Lock()

    def register(self, tag: LanguageTag, capabilities: LanguageCapabilities) -> None:
        """Register (or replace) the capabilities for a tag."""
        with self._lock:
            self._entries[tag] = capabilities

    def get(self, tag: LanguageTag) -> LanguageCapabilities:
        """Return the capabilities for a tag; all-default if unregistered."""
        with self._lock:
            return self._entries.get(tag, _NO_CAPABILITIES)

    def __contains__(self, tag: object) -> bool:
        """Check whether a tag has registered capabilities."""
        with self._lock:
            return tag in self._entries


_NO_CAPABILITIES = LanguageCapabilities()


def babel_plural_suffixes(tag: LanguageTag) -> Callable[[int], list[str]]:
    """Build a plural_suffixes slot from CLDR plural rules.

    The returned callable maps a count to its CLDR plural category, so
    resource keys can be written as KEY_ONE, KEY_FEW, KEY_OTHER.

    Args:
        tag: Language tag (e.g., "ru-RU")

    Returns:
        Callable returning a one-element list with the category name

    Raises:
        babel.core.UnknownLocaleError: If Babel does not know the language
    """
    locale = get_babel_locale(tag)

    def plural_suffixes(count: int) -> list[str]:
        return [locale.plural_form(abs(count))]

    return plural_suffixes
