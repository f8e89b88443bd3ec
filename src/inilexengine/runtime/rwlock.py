"""Readers-writer lock guarding a Language resolver's mutable state.

A resolver's string table, load record and debug trace are read far more
often than they are written. This lock lets membership checks and
non-debug lookups proceed concurrently while load() and debug-mode
translate() get exclusive access.

Semantics:
    - Any number of concurrent readers, or exactly one writer
    - Writer preference: a waiting writer blocks new readers
    - Reads are reentrant for the same thread
    - Writes are reentrant for the same thread (load() may call back into
      other write paths while holding the lock)
    - The writing thread may also take the read lock; it is counted as
      part of its write hold
    - Read-to-write upgrade is refused with RuntimeError, because two
      upgrading readers would wait on each other forever

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference and reentrant writes.

    Example:
        >>> lock = RWLock()
        >>> with lock.write():
        ...     with lock.read():  # writer may read its own state
        ...         pass
        >>> with lock.read():
        ...     with lock.read():  # reentrant
        ...         pass
    """

    __slots__ = (
        "_condition",
        "_readers",
        "_waiting_writers",
        "_writer",
        "_writer_depth",
    )

    def __init__(self) -> None:
        """Initialize an unlocked readers-writer lock."""
        self._condition = threading.Condition(threading.Lock())
        # thread id -> reentrant read depth
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._writer_depth: int = 0
        self._waiting_writers: int = 0

    @contextmanager
    def read(self) -> Generator[None]:
        """Hold the lock for shared access.

        Yields:
            None
        """
        self._acquire_read()
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self) -> Generator[None]:
        """Hold the lock for exclusive access.

        Raises:
            RuntimeError: If the calling thread holds only a read lock.

        Yields:
            None
        """
        self._acquire_write()
        try:
            yield
        finally:
            self._release_write()

    def _acquire_read(self) -> None:
        me = threading.get_ident()
        with self._condition:
            if self._writer == me:
                self._writer_depth += 1
                return
            if me in self._readers:
                self._readers[me] += 1
                return
            while self._writer is not None or self._waiting_writers > 0:
                self._condition.wait()
            self._readers[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()
        with self._condition:
            if self._writer == me:
                self._writer_depth -= 1
                return
            depth = self._readers.get(me)
            if depth is None:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            if depth > 1:
                self._readers[me] = depth - 1
                return
            del self._readers[me]
            if not self._readers:
                self._condition.notify_all()

    def _acquire_write(self) -> None:
        me = threading.get_ident()
        with self._condition:
            if self._writer == me:
                self._writer_depth += 1
                return
            if me in self._readers:
                msg = (
                    "Cannot upgrade read lock to write lock. "
                    "Release the read lock before acquiring the write lock."
                )
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                while self._readers or self._writer is not None:
                    self._condition.wait()
                self._writer = me
                self._writer_depth = 1
            finally:
                self._waiting_writers -= 1

    def _release_write(self) -> None:
        me = threading.get_ident()
        with self._condition:
            if self._writer != me:
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._writer_depth -= 1
            if self._writer_depth == 0:
                self._writer = None
                self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of distinct threads currently holding read locks."""
        with self._condition:
            return len(self._readers)

    @property
    def writer_active(self) -> bool:
        """True if any thread currently holds the write lock."""
        with self._condition:
            return self._writer is not None
