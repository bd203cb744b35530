"""
Base error classes for metriqual.

Provides a layered error hierarchy:
- MqlError: Base class for all library errors
- ConfigurationError: Invalid client construction
- MQLAPIError: Any failed request (HTTP, timeout, network)
- ResponseDecodeError: A success response that could not be decoded
- SpeechTaskError: An async speech task failed or did not finish
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from metriqual.errors.classification import (
    NETWORK_STATUS,
    TIMEOUT_STATUS,
    ErrorClass,
    classify_status,
    extract_error_fields,
    is_retryable,
)


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'transport', 'config', 'decode')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class MqlError(Exception):
    """Base class for all metriqual errors.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> MqlError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self


class ConfigurationError(MqlError):
    """Raised when a client cannot be constructed.

    Raised when:
    - The supplied HTTP client is already closed
    - timeout_ms is not positive
    - max_retries is negative
    """

    def __init__(self, message: str, *, option: str | None = None) -> None:
        ctx = ErrorContext(source="config")
        if option:
            ctx.details["option"] = option
        super().__init__(message, ctx)
        self.option = option


class MQLAPIError(MqlError):
    """Error raised for every failed request.

    Callers branch on ``status``:
    - 0: the gateway could not be reached
    - 408: the client gave up waiting
    - 4xx: the gateway rejected the request (``code`` usually set)
    - 5xx: the gateway failed and retries were exhausted

    Attributes:
        status: HTTP status code (0 for network failures)
        code: Machine-readable error code from the gateway
        details: Structured details from the gateway
    """

    def __init__(
        self,
        message: str,
        status: int,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        ctx = ErrorContext(source="api")
        ctx.details["status"] = status
        if code:
            ctx.details["code"] = code
        super().__init__(message, ctx)
        self.status = status
        self.code = code
        self.details = details

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (status={self.status}, code={self.code})"
        return f"{self.message} (status={self.status})"

    @property
    def error_class(self) -> ErrorClass:
        """Standardized classification of this error."""
        return classify_status(self.status)

    @property
    def is_retryable(self) -> bool:
        """Whether the transport retries this error."""
        return is_retryable(self.error_class)

    @classmethod
    def from_response(
        cls,
        status: int,
        body: Any = None,
        reason: str | None = None,
    ) -> MQLAPIError:
        """Create an error from a failed HTTP response.

        Args:
            status: HTTP status code
            body: Parsed JSON body, or None if it was not JSON
            reason: HTTP reason phrase used when the body carries no message

        Returns:
            MQLAPIError populated from the error envelope
        """
        message, code, details = extract_error_fields(body)
        if message is None:
            message = reason or f"HTTP {status}"
        return cls(message, status, code, details)

    @classmethod
    def timeout(cls) -> MQLAPIError:
        """The per-attempt timeout fired."""
        return cls("Request timeout", TIMEOUT_STATUS)

    @classmethod
    def network(cls, cause: BaseException) -> MQLAPIError:
        """The request never produced a response."""
        return cls(str(cause) or type(cause).__name__, NETWORK_STATUS)


class ResponseDecodeError(MqlError):
    """A successful response could not be decoded.

    Raised when:
    - A 2xx body is not valid JSON
    - A JSON payload does not match the expected schema
    """

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        ctx = ErrorContext(source="decode")
        if model:
            ctx.details["model"] = model
        super().__init__(message, ctx)
        self.model = model
        self.errors = errors or []


class SpeechTaskError(MqlError):
    """An async speech task failed or did not complete in time."""

    def __init__(self, message: str, *, task_id: str | None = None) -> None:
        ctx = ErrorContext(source="audio")
        if task_id:
            ctx.details["task_id"] = task_id
        super().__init__(message, ctx)
        self.task_id = task_id


class VideoTaskError(MqlError):
    """A video job failed or did not complete in time."""

    def __init__(self, message: str, *, job_id: str | None = None) -> None:
        ctx = ErrorContext(source="video")
        if job_id:
            ctx.details["job_id"] = job_id
        super().__init__(message, ctx)
        self.job_id = job_id
