"""Locale utilities bridging language tags and Babel.

Language tags use hyphens (en-GB) while Babel expects POSIX identifiers
(en_GB). Conversion happens here, once, so the rest of the code can keep
using the tag exactly as it appears in directory names.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a hyphenated language tag to POSIX format for Babel.

    Args:
        locale_code: Language tag (e.g., "en-GB", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_GB", "pt_BR")

    Example:
        >>> normalize_locale("en-GB")
        'en_GB'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Language tag (hyphen or underscore form accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("en-GB")
        >>> locale.territory
        'GB'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))
