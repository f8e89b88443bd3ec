"""Enumerations for IniLexEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ResolverState(StrEnum):
    """Construction state of a Language resolver.

    Construction walks these states once, in order. A resolver handed out
    by a factory or cache is always READY.

    StrEnum provides automatic string conversion: str(ResolverState.READY) == "ready"
    """

    UNINITIALIZED = "uninitialized"
    """Instance allocated, nothing loaded yet."""

    METADATA_LOADED = "metadata_loaded"
    """metadata.json parsed successfully."""

    OVERRIDE_LOADED = "override_loaded"
    """Override patch loaded (possibly empty)."""

    SYSTEM_LOADED = "system_loaded"
    """The "system" extension has been loaded (possibly empty)."""

    READY = "ready"
    """Construction complete; load() and translate() may be called."""


class LoadStatus(StrEnum):
    """Outcome of a single resource file parse during load().

    StrEnum provides automatic string conversion: str(LoadStatus.LOADED) == "loaded"
    """

    LOADED = "loaded"
    """File parsed and contributed at least one string."""

    EMPTY = "empty"
    """File absent, unreadable or contained no strings."""

    CACHED = "cached"
    """Outcome reused from the load record without re-parsing."""


__all__ = [
    "LoadStatus",
    "ResolverState",
]
