"""Debug-mode lookup tracing and caller attribution.

In debug mode a Language records every lookup: hits go to the "used"
report keyed by resource key, misses to the "orphans" report with the
call trace and the original string. Tooling reads both reports to find
untranslated text and dead keys. The reports are append-only and are
never consulted when resolving a string.

Caller attribution is pluggable rather than introspective. The calling
layer either passes ``caller=`` to Language.translate() or wraps its
rendering in ``call_site(...)``; the innermost active call site becomes
the caller, and the whole stack becomes the orphan trace.

Example:
    >>> with call_site("render", module="views.users", file="users.py", line=42):
    ...     language.translate("COM_USERS_TITLE")
    >>> language.get_used()["COM_USERS_TITLE"][0].function
    'render'

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

    from inilexengine.localization.types import ResourceKey

__all__ = [
    "CallerSite",
    "DebugTrace",
    "OrphanRecord",
    "call_site",
    "current_caller",
    "current_trace",
]


@dataclass(frozen=True, slots=True)
class CallerSite:
    """Where a translation was requested from.

    All fields are optional; an empty CallerSite means "unknown".

    Attributes:
        function: Function or template block name
        module: Module, class or component name
        file: Source file
        line: Line number in file
    """

    function: str | None = None
    module: str | None = None
    file: str | None = None
    line: int | None = None


@dataclass(frozen=True, slots=True)
class OrphanRecord:
    """One lookup of a key that had no translation.

    Attributes:
        trace: Active call sites, innermost first
        key: Upper-cased key that was looked up
        string: The string exactly as the caller passed it
    """

    trace: tuple[CallerSite, ...]
    key: ResourceKey
    string: str


_UNKNOWN_CALLER = CallerSite()

_local = threading.local()


def _stack() -> list[CallerSite]:
    stack: list[CallerSite] | None = getattr(_local, "stack", None)
    if stack is None:
        stack = []
        _local.stack = stack
    return stack


@contextmanager
def call_site(
    function: str | None = None,
    *,
    module: str | None = None,
    file: str | None = None,
    line: int | None = None,
) -> Generator[CallerSite]:
    """Push a call site for translations made inside the block.

    Call sites nest per thread; the innermost one is the caller.

    Yields:
        The pushed CallerSite
    """
    site = CallerSite(function=function, module=module, file=file, line=line)
    stack = _stack()
    stack.append(site)
    try:
        yield site
    finally:
        stack.pop()


def current_caller() -> CallerSite:
    """Innermost active call site on this thread, or an empty CallerSite."""
    stack = _stack()
    return stack[-1] if stack else _UNKNOWN_CALLER


def current_trace() -> tuple[CallerSite, ...]:
    """All active call sites on this thread, innermost first."""
    return tuple(reversed(_stack()))


class DebugTrace:
    """Append-only used/orphan reports for one Language.

    Not thread-safe on its own: the owning Language serializes access.
    """

    __slots__ = ("_orphans", "_used")

    def __init__(self) -> None:
        """Initialize empty reports."""
        self._used: dict[ResourceKey, list[CallerSite]] = {}
        self._orphans: dict[ResourceKey, list[OrphanRecord]] = {}

    def record_use(self, key: ResourceKey, caller: CallerSite) -> None:
        """Record a successful lookup."""
        self._used.setdefault(key, []).append(caller)

    def record_orphan(self, key: ResourceKey, string: str, trace: tuple[CallerSite, ...]) -> None:
        """Record a lookup with no translation."""
        self._orphans.setdefault(key, []).append(OrphanRecord(trace=trace, key=key, string=string))

    @property
    def used(self) -> dict[ResourceKey, list[CallerSite]]:
        """Copy of the used report."""
        return {key: list(sites) for key, sites in self._used.items()}

    @property
    def orphans(self) -> dict[ResourceKey, list[OrphanRecord]]:
        """Copy of the orphan report."""
        return {key: list(records) for key, records in self._orphans.items()}
