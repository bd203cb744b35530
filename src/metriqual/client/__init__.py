"""
Client layer - User-facing API.

This module provides:
- MQL: Main entry point bundling every resource API
- Cancellation: Stream cancellation control
"""

from metriqual.client.cancel import (
    CancelHandle,
    CancelReason,
    CancelState,
    CancelToken,
    create_cancel_pair,
)
from metriqual.client.core import MQL

__all__ = [
    "MQL",
    "CancelHandle",
    "CancelReason",
    "CancelState",
    "CancelToken",
    "create_cancel_pair",
]
