"""
Upload connection admission pool.

Bounds the number of chunk transfers in flight across every upload of a
client. All calls happen on the event loop thread, so acquiring a token and
dispatching a transfer in the same synchronous step cannot race.
"""
from collections import deque
from typing import Callable, Deque

from ..logging import get_logger

logger = get_logger('kalturapy.upload.connections')

Waiter = Callable[[], None]


class UploadConnectionsManager:
    """
    Counter of admission tokens plus a FIFO queue of waiters.

    Example:
        >>> pool = UploadConnectionsManager(2)
        >>> pool.acquire(), pool.acquire(), pool.acquire()
        (True, True, False)
        >>> pool.release()
    """

    DEFAULT_CONNECTIONS = 6

    def __init__(self, total_connections: int = DEFAULT_CONNECTIONS):
        if total_connections < 1:
            raise ValueError("Total connections must be positive")
        self._total = total_connections
        self._available = total_connections
        self._waiters: Deque[Waiter] = deque()

    @property
    def total(self) -> int:
        return self._total

    @property
    def available(self) -> int:
        return self._available

    @property
    def waiting(self) -> int:
        return len(self._waiters)

    def acquire(self) -> bool:
        """Take a token if one is free (never blocks)."""
        if self._available > 0:
            self._available -= 1
            return True
        return False

    def release(self) -> None:
        """
        Return a token and notify waiters.

        Waiters are popped in FIFO order and invoked once each, for as long
        as a token is free; a waiter that does not acquire leaves the token
        to the next one.

        Raises:
            RuntimeError: If more tokens are released than were acquired
        """
        if self._available >= self._total:
            raise RuntimeError("release() called more times than acquire()")
        self._available += 1

        while self._waiters and self._available > 0:
            waiter = self._waiters.popleft()
            try:
                waiter()
            except Exception as e:
                logger.warning(f"Upload connection waiter failed: {e}")

    def register_waiter(self, callback: Waiter) -> None:
        """Queue a callback to be invoked when a token is released."""
        self._waiters.append(callback)

    def remove_waiter(self, callback: Waiter) -> None:
        """Drop every queued occurrence of a callback."""
        self._waiters = deque(waiter for waiter in self._waiters if waiter is not callback)
