"""
Transport layer - HTTP client for the MQL gateway.

Provides httpx-based transport with:
- Buffered JSON and binary requests
- Per-attempt timeout and retry with backoff
- Server-Sent Events streaming
- Authorization header selection
"""

from metriqual.transport.auth import get_auth_header, select_credential
from metriqual.transport.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_MS,
    ClientConfig,
)
from metriqual.transport.http import HttpTransport

__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT_MS",
    "HttpTransport",
    "get_auth_header",
    "select_credential",
]
