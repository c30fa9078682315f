"""Host-owned guard against overlapping detection runs."""

import threading
from typing import Any

__all__ = ["AlreadyRunningError", "RunLock"]


class AlreadyRunningError(RuntimeError):
    """Raised when a run is started while another holds the lock."""


class RunLock:
    """Non-blocking lock a host holds for the duration of a run.

    The engine itself is reentrant; hosts that drive a shared collection
    use one ``RunLock`` per collection to refuse a second concurrent run.

    Examples
    --------
    >>> lock = RunLock()
    >>> with lock:
    ...     pairs = detect_duplicates(items)
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def acquire(self) -> None:
        """Take the lock.

        Raises
        ------
        AlreadyRunningError
            If a run already holds it.
        """
        if not self._lock.acquire(blocking=False):
            raise AlreadyRunningError("Duplicate detection is already running")

    def release(self) -> None:
        """Release the lock."""
        self._lock.release()

    def __enter__(self) -> "RunLock":
        self.acquire()
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()
