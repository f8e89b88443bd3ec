"""Process-wide cache of constructed Language resolvers.

Maps (language tag, debug flag) to one shared Language instance. Resolver
construction reads metadata and resource files, so it is performed at
most once per key: concurrent requests for the same key wait for the
first construction to finish and then share its result, while requests
for different keys construct in parallel.

Architecture:
    - Compound tuple keys (tag, debug); no string concatenation
    - One construction lock per key (single-flight)
    - A short global lock guards the entry table and statistics only;
      it is never held while a resolver is being built
    - Failed constructions store nothing, so the next request retries
    - No eviction: entries live until invalidate() or process exit

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inilexengine.localization.language import Language
    from inilexengine.localization.types import LanguageTag

__all__ = ["LanguageBuilder", "LanguageCache"]

logger = logging.getLogger(__name__)

type LanguageBuilder = Callable[[LanguageTag, bool], Language]
"""Callable constructing a Language for (tag, debug)."""

type _CacheKey = tuple[str, bool]


class LanguageCache:
    """Keyed, single-flight cache of Language resolvers.

    The cache is an explicit object: create one per application (or share
    one process-wide) and inject it into the factories that need it.

    Example:
        >>> cache = LanguageCache(lambda tag, debug: Language(factory, tag, debug))
        >>> cache.get("en-GB") is cache.get("en-GB")
        True
        >>> cache.get("en-GB") is cache.get("en-GB", debug=True)
        False
    """

    __slots__ = (
        "_builder",
        "_constructions",
        "_entries",
        "_hits",
        "_key_locks",
        "_lock",
        "_misses",
    )

    def __init__(self, builder: LanguageBuilder | None = None) -> None:
        """Initialize an empty cache.

        Args:
            builder: Default constructor used by get() when no per-call
                builder is given
        """
        self._builder = builder
        self._entries: dict[_CacheKey, Language] = {}
        self._key_locks: dict[_CacheKey, threading.Lock] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._constructions = 0

    def get(
        self,
        tag: LanguageTag,
        debug: bool = False,
        *,
        builder: LanguageBuilder | None = None,
    ) -> Language:
        """Return the shared Language for (tag, debug), building it once.

        Args:
            tag: Language tag (e.g., "en-GB"); compared case-sensitively
            debug: Debug mode flag
            builder: Constructor for this call (overrides the default)

        Returns:
            The cached Language instance for the key

        Raises:
            ValueError: If the key is not cached and no builder is available
            MetadataError: If construction fails (nothing is cached)
        """
        key: _CacheKey = (tag, bool(debug))

        with self._lock:
            language = self._entries.get(key)
            if language is not None:
                self._hits += 1
                return language
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # Another thread may have finished building while we waited.
            with self._lock:
                language = self._entries.get(key)
                if language is not None:
                    self._hits += 1
                    return language
                self._misses += 1

            build = builder if builder is not None else self._builder
            if build is None:
                msg = f"No builder available to construct language {tag!r}"
                raise ValueError(msg)

            language = build(tag, bool(debug))

            with self._lock:
                self._entries[key] = language
                self._constructions += 1

        logger.debug("Cached language %s (debug=%s)", tag, bool(debug))
        return language

    def __contains__(self, key: object) -> bool:
        """Check whether a (tag, debug) pair is cached."""
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        tag, debug = key
        with self._lock:
            return (tag, bool(debug)) in self._entries

    def __len__(self) -> int:
        """Number of cached resolvers."""
        with self._lock:
            return len(self._entries)

    def invalidate(self, tag: LanguageTag, debug: bool = False) -> bool:
        """Drop a cached resolver so the next get() rebuilds it.

        Callers already holding the old instance keep using it.

        Args:
            tag: Language tag
            debug: Debug mode flag

        Returns:
            True if an entry was removed
        """
        with self._lock:
            removed = self._entries.pop((tag, bool(debug)), None) is not None
        if removed:
            logger.debug("Invalidated cached language %s (debug=%s)", tag, bool(debug))
        return removed

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with:
            - size: Cached resolvers
            - hits: Requests served from the cache
            - misses: Requests that had to construct
            - constructions: Successful constructions
        """
        with self._lock:
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "constructions": self._constructions,
            }
