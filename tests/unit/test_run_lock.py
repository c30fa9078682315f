"""Tests for the host-side run lock."""

import pytest

from refdedupe.engine import AlreadyRunningError, RunLock


@pytest.mark.unit
def test_second_acquire_raises() -> None:
    """Test a held lock refuses another run."""
    lock = RunLock()

    with lock:
        assert lock.locked
        with pytest.raises(AlreadyRunningError):
            lock.acquire()

    assert not lock.locked


@pytest.mark.unit
def test_lock_released_on_error() -> None:
    """Test the lock is released when the run raises."""
    lock = RunLock()

    with pytest.raises(RuntimeError, match="failed run"):
        with lock:
            raise RuntimeError("failed run")

    with lock:
        assert lock.locked


@pytest.mark.unit
def test_separate_locks_are_independent() -> None:
    """Test the guard is per lock, not global."""
    first, second = RunLock(), RunLock()

    with first, second:
        assert first.locked
        assert second.locked
