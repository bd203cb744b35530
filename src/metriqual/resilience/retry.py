"""
Retry policy with exponential backoff.

The transport retries a request on server errors (5xx) and on network
failures, never on client errors or timeouts. Attempts run strictly one
after another inside a bounded loop.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from metriqual.errors import MQLAPIError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")


class JitterStrategy(str, Enum):
    """Jitter strategy for retry delays."""

    NONE = "none"
    FULL = "full"
    EQUAL = "equal"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry policy.

    Attributes:
        max_retries: Maximum number of retries after the first attempt
        min_delay_ms: Delay before the first retry in milliseconds
        max_delay_ms: Upper bound for any single delay in milliseconds
        exponential_base: Growth factor between consecutive delays
        jitter: Jitter strategy (none, full, equal)
    """

    max_retries: int = 3
    min_delay_ms: int = 1000
    max_delay_ms: int = 10000
    exponential_base: float = 2.0
    jitter: JitterStrategy = JitterStrategy.NONE

    @classmethod
    def no_retry(cls) -> RetryConfig:
        """Create a config that disables retries."""
        return cls(max_retries=0)


@dataclass
class RetryResult:
    """Result of a retry operation.

    Attributes:
        success: Whether the operation succeeded
        value: The result value (if success)
        error: The last error (if failed)
        attempts: Number of attempts made
        total_delay_ms: Total time spent waiting between attempts
    """

    success: bool
    value: Any = None
    error: Exception | None = None
    attempts: int = 0
    total_delay_ms: float = 0.0


class RetryPolicy:
    """Retry policy with capped exponential backoff.

    With the default config the delays before retries 0, 1, 2, 3, 4 are
    1000, 2000, 4000, 8000 and 10000 ms.

    Example:
        >>> policy = RetryPolicy(RetryConfig(max_retries=3))
        >>> result = await policy.execute(send_request)
        >>> if not result.success:
        ...     raise result.error
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self._config = config or RetryConfig()

    @property
    def config(self) -> RetryConfig:
        return self._config

    def calculate_delay_ms(self, attempt: int) -> float:
        """Calculate the delay before retrying after ``attempt``.

        Args:
            attempt: Number of the attempt that just failed (0-based)

        Returns:
            Delay in milliseconds
        """
        base_delay_ms = min(
            self._config.min_delay_ms * (self._config.exponential_base ** attempt),
            self._config.max_delay_ms,
        )

        if self._config.jitter == JitterStrategy.FULL:
            return random.uniform(0, base_delay_ms)
        if self._config.jitter == JitterStrategy.EQUAL:
            return base_delay_ms / 2 + random.uniform(0, base_delay_ms / 2)
        return base_delay_ms

    def should_retry(self, error: Exception, attempt: int) -> bool:
        """Check if an error should trigger another attempt.

        Args:
            error: The exception raised by the attempt
            attempt: Number of the attempt that raised it (0-based)

        Returns:
            True if another attempt should be made
        """
        if attempt >= self._config.max_retries:
            return False
        if isinstance(error, MQLAPIError):
            return error.is_retryable
        return False

    async def _wait(self, delay_ms: float) -> None:
        await asyncio.sleep(delay_ms / 1000.0)

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        on_retry: Callable[[int, Exception, float], None] | None = None,
    ) -> RetryResult:
        """Execute an operation with retry.

        Args:
            operation: Async operation performing one attempt
            on_retry: Called with (next attempt number, error, delay_ms)
                before each backoff sleep

        Returns:
            RetryResult with success status and value/error
        """
        total_delay_ms = 0.0
        attempt = 0

        while True:
            try:
                value = await operation()
            except Exception as e:
                if not self.should_retry(e, attempt):
                    return RetryResult(
                        success=False,
                        error=e,
                        attempts=attempt + 1,
                        total_delay_ms=total_delay_ms,
                    )

                delay_ms = self.calculate_delay_ms(attempt)
                total_delay_ms += delay_ms
                attempt += 1

                if on_retry:
                    on_retry(attempt, e, delay_ms)

                await self._wait(delay_ms)
            else:
                return RetryResult(
                    success=True,
                    value=value,
                    attempts=attempt + 1,
                    total_delay_ms=total_delay_ms,
                )

