"""
metriqual: Python client for the MQL AI proxy gateway.

Chat completions with provider fallback, model listing, embeddings, audio,
images, video, proxy keys, webhooks, organizations and usage analytics
over one resilient transport.
"""
from __future__ import annotations

from metriqual.client import MQL, CancelHandle, CancelReason, CancelToken, create_cancel_pair
from metriqual.errors import (
    ConfigurationError,
    ErrorClass,
    MQLAPIError,
    MqlError,
    ResponseDecodeError,
    SpeechTaskError,
    VideoTaskError,
)
from metriqual.transport import ClientConfig, HttpTransport
from metriqual.types import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "MQL",
    "ClientConfig",
    "HttpTransport",
    # Cancellation
    "CancelHandle",
    "CancelReason",
    "CancelToken",
    "create_cancel_pair",
    # Errors
    "ConfigurationError",
    "ErrorClass",
    "MQLAPIError",
    "MqlError",
    "ResponseDecodeError",
    "SpeechTaskError",
    "VideoTaskError",
    # Types - Chat
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    # Version
    "__version__",
]
