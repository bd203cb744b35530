"""
Error classification for gateway failures.

Maps HTTP status codes (and the synthetic status 0 used for network
failures) onto a small set of error classes that drive retry decisions.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorClass(str, Enum):
    """Standard error classification."""

    INVALID_REQUEST = "invalid_request"
    """Malformed request body or invalid parameters."""

    AUTHENTICATION = "authentication"
    """Missing/invalid proxy key or session token."""

    PERMISSION_DENIED = "permission_denied"
    """Caller is authenticated but not permitted to access the resource."""

    NOT_FOUND = "not_found"
    """Requested resource not found."""

    CONFLICT = "conflict"
    """Request conflicts with current resource state."""

    RATE_LIMITED = "rate_limited"
    """Throttled by the gateway or an upstream provider."""

    TIMEOUT = "timeout"
    """The client gave up waiting for a response."""

    NETWORK = "network"
    """The gateway could not be reached at all."""

    SERVER_ERROR = "server_error"
    """Transient server-side failure (5xx)."""

    OVERLOADED = "overloaded"
    """Service overloaded / temporarily unavailable."""

    OTHER = "other"
    """Anything else."""


# Status 0 never comes from a server; it marks a transport-level failure.
NETWORK_STATUS = 0
TIMEOUT_STATUS = 408

_RETRYABLE_CLASSES: set[ErrorClass] = {
    ErrorClass.NETWORK,
    ErrorClass.SERVER_ERROR,
    ErrorClass.OVERLOADED,
}

_DEFAULT_STATUS_MAPPING: dict[int, ErrorClass] = {
    NETWORK_STATUS: ErrorClass.NETWORK,
    400: ErrorClass.INVALID_REQUEST,
    401: ErrorClass.AUTHENTICATION,
    403: ErrorClass.PERMISSION_DENIED,
    404: ErrorClass.NOT_FOUND,
    TIMEOUT_STATUS: ErrorClass.TIMEOUT,
    409: ErrorClass.CONFLICT,
    422: ErrorClass.INVALID_REQUEST,
    429: ErrorClass.RATE_LIMITED,
    503: ErrorClass.OVERLOADED,
}


def classify_status(status: int) -> ErrorClass:
    """Classify an HTTP status code into an error class.

    Args:
        status: HTTP status code, or 0 for a network failure

    Returns:
        The matching ErrorClass
    """
    if status in _DEFAULT_STATUS_MAPPING:
        return _DEFAULT_STATUS_MAPPING[status]

    if 400 <= status < 500:
        return ErrorClass.INVALID_REQUEST
    # Everything at or above 500 is treated as a transient server failure,
    # including non-standard codes some proxies emit.
    if status >= 500:
        return ErrorClass.SERVER_ERROR

    return ErrorClass.OTHER


def is_retryable(error_class: ErrorClass) -> bool:
    """Check if an error class is retried by the transport."""
    return error_class in _RETRYABLE_CLASSES


def extract_error_fields(
    body: Any,
) -> tuple[str | None, str | None, dict[str, Any] | None]:
    """Extract (message, code, details) from an error response body.

    Supports the gateway's flat envelope and the nested envelope that
    upstream providers pass through:
    - Flat: {"error": "...", "code": "...", "details": {...}}
    - Nested: {"error": {"message": "...", "code": "..."}}
    - Simple: {"message": "..."}

    Args:
        body: Response body (parsed JSON)

    Returns:
        Tuple of message, code and details; each None when absent
    """
    if not isinstance(body, dict):
        return None, None, None

    message: str | None = None
    code: str | None = None
    details: dict[str, Any] | None = None

    error = body.get("error")
    if isinstance(error, str):
        message = error
    elif isinstance(error, dict):
        if isinstance(error.get("message"), str):
            message = error["message"]
        if error.get("code") is not None:
            code = str(error["code"])

    if message is None and isinstance(body.get("message"), str):
        message = body["message"]

    if body.get("code") is not None:
        code = str(body["code"])

    if isinstance(body.get("details"), dict):
        details = body["details"]

    return message, code, details
