"""Cancelable asynchronous action."""
import asyncio
from typing import Any, Awaitable, Generator, Optional


class CancelableAction:
    """
    An operation running on the event loop that can be awaited or cancelled.

    Wraps an asyncio.Task: awaiting the action returns the task's result,
    cancel() aborts it. Cancelling an action that already finished is a
    no-op.

    Example:
        >>> action = coordinator.transmit(request)
        >>> ...
        >>> action.cancel()
    """

    def __init__(self, operation: Awaitable[Any], name: Optional[str] = None):
        self._task = asyncio.ensure_future(operation)
        if name and hasattr(self._task, 'set_name'):
            self._task.set_name(name)

    def __await__(self) -> Generator[Any, None, Any]:
        return self._task.__await__()

    def cancel(self) -> bool:
        """Cancel the operation; returns False if it had already finished."""
        if self._task.done():
            return False
        return self._task.cancel()

    def done(self) -> bool:
        return self._task.done()

    def cancelled(self) -> bool:
        return self._task.cancelled()

    def result(self) -> Any:
        """Result of a finished action (raises its error if it failed)."""
        return self._task.result()

    @property
    def task(self) -> asyncio.Future:
        return self._task
