"""
Stream cancellation control.

A CancelToken is handed to ``HttpTransport.stream`` (or ``ChatAPI.stream``)
and aborts the pending read when fired. The abort surfaces to the consumer
as ``asyncio.CancelledError``.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from metriqual.telemetry import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

logger = get_logger("metriqual.cancel")


class CancelReason(str, Enum):
    """Reasons for cancellation."""

    USER_REQUEST = "user_request"
    TIMEOUT = "timeout"
    SHUTDOWN = "shutdown"


@dataclass
class CancelState:
    """State of a cancellation token."""

    cancelled: bool = False
    reason: CancelReason | None = None
    timestamp: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class CancelToken:
    """Cancellation token for streaming requests.

    Example:
        >>> token = CancelToken()
        >>> async for payload in transport.stream("/v1/chat/completions", body,
        ...                                       cancel_token=token):
        ...     if done_early(payload):
        ...         token.cancel()
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize cancellation token.

        Args:
            timeout: Optional timeout in seconds after which the token fires
        """
        self._state = CancelState()
        self._event = asyncio.Event()
        self._callbacks: list[Callable[[CancelReason], Any]] = []
        self._timeout = timeout
        self._timeout_task: asyncio.Task[None] | None = None

        if timeout:
            self._start_timeout()

    def _start_timeout(self) -> None:
        async def timeout_handler() -> None:
            await asyncio.sleep(self._timeout)  # type: ignore[arg-type]
            self.cancel(CancelReason.TIMEOUT)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, cancel timeout not armed")
            return
        self._timeout_task = loop.create_task(timeout_handler())

    def cancel(
        self,
        reason: CancelReason = CancelReason.USER_REQUEST,
        **metadata: Any,
    ) -> bool:
        """Request cancellation.

        Returns:
            True if cancellation was newly requested, False if already cancelled
        """
        if self._state.cancelled:
            return False

        self._state.cancelled = True
        self._state.reason = reason
        self._state.timestamp = time.time()
        self._state.metadata.update(metadata)

        self._event.set()

        if self._timeout_task and not self._timeout_task.done():
            self._timeout_task.cancel()

        for callback in self._callbacks:
            self._invoke(callback, reason)

        return True

    def _invoke(self, callback: Callable[[CancelReason], Any], reason: CancelReason) -> None:
        try:
            result = callback(reason)
        except Exception:
            logger.exception("Cancel callback failed", reason=reason.value)
            return
        if asyncio.iscoroutine(result):
            _ = asyncio.ensure_future(result)  # noqa: RUF006

    @property
    def is_cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> CancelReason | None:
        return self._state.reason

    @property
    def state(self) -> CancelState:
        return self._state

    async def wait(self) -> CancelReason:
        """Wait until cancellation is requested."""
        await self._event.wait()
        return self._state.reason or CancelReason.USER_REQUEST

    def on_cancel(self, callback: Callable[[CancelReason], Any]) -> CancelToken:
        """Register a callback to be called on cancellation.

        Returns:
            Self for chaining
        """
        self._callbacks.append(callback)
        if self._state.cancelled and self._state.reason:
            self._invoke(callback, self._state.reason)
        return self

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if cancelled.

        Raises:
            asyncio.CancelledError: If cancellation was requested
        """
        if self._state.cancelled:
            reason = self._state.reason or CancelReason.USER_REQUEST
            raise asyncio.CancelledError(reason.value)

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        The pending operation is cancelled when the token fires, and
        ``asyncio.CancelledError`` is raised in its place. The same happens
        when the awaiting task itself is cancelled. Either way the operation
        has finished unwinding before the error surfaces.
        """
        if self._state.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            self.raise_if_cancelled()

        operation = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({operation, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not operation.done():
                operation.cancel()
                # Nothing may touch the operation's resources until it has unwound.
                await asyncio.wait({operation})

        if operation.cancelled():
            self.raise_if_cancelled()
        return operation.result()


class CancelHandle:
    """Public handle for cancelling a stream whose token is held internally."""

    def __init__(self, token: CancelToken) -> None:
        self._token = token

    def cancel(
        self,
        reason: CancelReason = CancelReason.USER_REQUEST,
        **metadata: Any,
    ) -> bool:
        return self._token.cancel(reason, **metadata)

    @property
    def is_cancelled(self) -> bool:
        return self._token.is_cancelled

    @property
    def reason(self) -> CancelReason | None:
        return self._token.reason


def create_cancel_pair(
    timeout: float | None = None,
) -> tuple[CancelHandle, CancelToken]:
    """Create a cancel handle and token pair.

    Args:
        timeout: Optional timeout in seconds

    Returns:
        Tuple of (CancelHandle, CancelToken)
    """
    token = CancelToken(timeout=timeout)
    return CancelHandle(token), token
