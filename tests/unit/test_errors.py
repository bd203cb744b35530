"""Tests for the error hierarchy and classification."""

from __future__ import annotations

import httpx
import pytest

from metriqual.errors import (
    ConfigurationError,
    ErrorClass,
    MQLAPIError,
    MqlError,
    ResponseDecodeError,
    SpeechTaskError,
    VideoTaskError,
    classify_status,
    extract_error_fields,
    is_retryable,
)


class TestClassification:
    """Tests for status classification."""

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (0, ErrorClass.NETWORK),
            (400, ErrorClass.INVALID_REQUEST),
            (401, ErrorClass.AUTHENTICATION),
            (403, ErrorClass.PERMISSION_DENIED),
            (404, ErrorClass.NOT_FOUND),
            (408, ErrorClass.TIMEOUT),
            (409, ErrorClass.CONFLICT),
            (418, ErrorClass.INVALID_REQUEST),
            (429, ErrorClass.RATE_LIMITED),
            (500, ErrorClass.SERVER_ERROR),
            (503, ErrorClass.OVERLOADED),
            (520, ErrorClass.SERVER_ERROR),
            (302, ErrorClass.OTHER),
        ],
    )
    def test_classify_status(self, status: int, expected: ErrorClass) -> None:
        """Test status code mapping."""
        assert classify_status(status) == expected

    def test_retryable_classes(self) -> None:
        """Test which classes are retried."""
        assert is_retryable(ErrorClass.NETWORK)
        assert is_retryable(ErrorClass.SERVER_ERROR)
        assert is_retryable(ErrorClass.OVERLOADED)
        assert not is_retryable(ErrorClass.TIMEOUT)
        assert not is_retryable(ErrorClass.RATE_LIMITED)
        assert not is_retryable(ErrorClass.NOT_FOUND)


class TestExtractErrorFields:
    """Tests for error envelope parsing."""

    def test_flat_envelope(self) -> None:
        """Test the gateway's own error shape."""
        body = {"error": "Key exhausted", "code": "LIMIT", "details": {"provider": "openai"}}
        assert extract_error_fields(body) == ("Key exhausted", "LIMIT", {"provider": "openai"})

    def test_nested_envelope(self) -> None:
        """Test the upstream provider shape."""
        body = {"error": {"message": "Rate limit", "code": 429, "type": "requests"}}
        assert extract_error_fields(body) == ("Rate limit", "429", None)

    def test_message_only(self) -> None:
        """Test a bare message body."""
        assert extract_error_fields({"message": "Oops"}) == ("Oops", None, None)

    @pytest.mark.parametrize("body", [None, "text", [1, 2], {}])
    def test_unusable_bodies(self, body) -> None:
        """Test bodies with nothing to extract."""
        assert extract_error_fields(body) == (None, None, None)


class TestMQLAPIError:
    """Tests for MQLAPIError."""

    def test_attributes(self) -> None:
        """Test error fields and hierarchy."""
        err = MQLAPIError("Not found", 404, "NOT_FOUND", {"id": "x"})
        assert isinstance(err, MqlError)
        assert err.message == "Not found"
        assert err.status == 404
        assert err.code == "NOT_FOUND"
        assert err.details == {"id": "x"}
        assert err.error_class == ErrorClass.NOT_FOUND
        assert err.is_retryable is False

    def test_str(self) -> None:
        """Test string rendering."""
        assert str(MQLAPIError("Boom", 500)) == "Boom (status=500)"
        assert str(MQLAPIError("Nope", 403, "FORBIDDEN")) == "Nope (status=403, code=FORBIDDEN)"

    def test_from_response(self) -> None:
        """Test construction from a failed response body."""
        err = MQLAPIError.from_response(422, {"error": "Invalid", "code": "BAD_INPUT"})
        assert (err.message, err.status, err.code) == ("Invalid", 422, "BAD_INPUT")

    def test_from_response_fallbacks(self) -> None:
        """Test message fallbacks when the body has none."""
        assert MQLAPIError.from_response(502, None, "Bad Gateway").message == "Bad Gateway"
        assert MQLAPIError.from_response(599, {}).message == "HTTP 599"

    def test_timeout(self) -> None:
        """Test the timeout factory."""
        err = MQLAPIError.timeout()
        assert err.status == 408
        assert err.message == "Request timeout"
        assert err.is_retryable is False

    def test_network(self) -> None:
        """Test the network factory keeps the cause's message."""
        err = MQLAPIError.network(httpx.ConnectError("getaddrinfo failed"))
        assert err.status == 0
        assert err.message == "getaddrinfo failed"
        assert err.is_retryable is True

    def test_network_without_message(self) -> None:
        """Test fallback to the exception type name."""
        assert MQLAPIError.network(OSError()).message == "OSError"


class TestOtherErrors:
    """Tests for the remaining error types."""

    def test_configuration_error(self) -> None:
        """Test option tracking."""
        err = ConfigurationError("bad timeout", option="timeout_ms")
        assert err.option == "timeout_ms"
        assert err.context.source == "config"
        assert "[config]" in str(err)

    def test_with_hint(self) -> None:
        """Test adding a hint after construction."""
        err = ConfigurationError("bad").with_hint("pass a positive value")
        assert "hint: pass a positive value" in str(err)

    def test_response_decode_error(self) -> None:
        """Test validation details are kept."""
        err = ResponseDecodeError("bad payload", model="Model", errors=[{"loc": ("id",)}])
        assert err.model == "Model"
        assert err.errors == [{"loc": ("id",)}]

    def test_speech_task_error(self) -> None:
        """Test task id tracking."""
        err = SpeechTaskError("failed", task_id="t-1")
        assert err.task_id == "t-1"
        assert err.context.details["task_id"] == "t-1"

    def test_video_task_error(self) -> None:
        """Test job id tracking."""
        err = VideoTaskError("timed out", job_id="video_1")
        assert err.job_id == "video_1"
        assert err.context.source == "video"
        assert err.context.details["job_id"] == "video_1"
