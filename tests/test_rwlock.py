"""Tests for the readers-writer lock."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from inilexengine.runtime import RWLock


class TestRWLockBasics:
    """Test single-thread acquisition rules."""

    def test_read_reentrant(self) -> None:
        """A thread may nest read locks."""
        lock = RWLock()
        with lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_write_reentrant(self) -> None:
        """A thread may nest write locks."""
        lock = RWLock()
        with lock.write(), lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_writer_may_read(self) -> None:
        """The writing thread can take the read lock without deadlock."""
        lock = RWLock()
        with lock.write():
            with lock.read():
                assert lock.reader_count == 0
            assert lock.writer_active
        assert not lock.writer_active

    def test_upgrade_refused(self) -> None:
        """Upgrading a read lock to a write lock raises."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"):
            with lock.write():
                pass
        assert lock.reader_count == 0

    def test_released_after_exception(self) -> None:
        """Locks are released when the body raises."""
        lock = RWLock()
        with pytest.raises(ValueError), lock.write():
            raise ValueError
        assert not lock.writer_active


class TestRWLockConcurrency:
    """Test multi-thread exclusion."""

    def test_readers_share(self) -> None:
        """Several threads hold the read lock at the same time."""
        lock = RWLock()
        barrier = threading.Barrier(4)
        peak: list[int] = []

        def reader() -> None:
            with lock.read():
                barrier.wait(timeout=5)
                peak.append(lock.reader_count)

        with ThreadPoolExecutor(max_workers=4) as executor:
            for future in [executor.submit(reader) for _ in range(4)]:
                future.result()

        assert max(peak) == 4

    def test_writer_excludes_readers(self) -> None:
        """A reader waits while a writer holds the lock."""
        lock = RWLock()
        events: list[str] = []
        writer_holding = threading.Event()

        def writer() -> None:
            with lock.write():
                writer_holding.set()
                time.sleep(0.05)
                events.append("write-done")

        def reader() -> None:
            writer_holding.wait(timeout=5)
            with lock.read():
                events.append("read")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert events == ["write-done", "read"]

    def test_writes_serialized(self) -> None:
        """Concurrent writers never overlap."""
        lock = RWLock()
        active = 0
        overlaps = 0
        guard = threading.Lock()

        def writer() -> None:
            nonlocal active, overlaps
            with lock.write():
                with guard:
                    active += 1
                    if active > 1:
                        overlaps += 1
                time.sleep(0.001)
                with guard:
                    active -= 1

        with ThreadPoolExecutor(max_workers=8) as executor:
            for future in [executor.submit(writer) for _ in range(40)]:
                future.result()

        assert overlaps == 0
