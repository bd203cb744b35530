"""
Resilience - bounded retry with exponential backoff.
"""

from metriqual.resilience.retry import (
    JitterStrategy,
    RetryConfig,
    RetryPolicy,
    RetryResult,
)

__all__ = [
    "JitterStrategy",
    "RetryConfig",
    "RetryPolicy",
    "RetryResult",
]
