"""
Error hierarchy for metriqual.

Every request failure surfaces as MQLAPIError; construction and decode
problems have their own types.
"""

from metriqual.errors.base import (
    ConfigurationError,
    ErrorContext,
    MQLAPIError,
    MqlError,
    ResponseDecodeError,
    SpeechTaskError,
    VideoTaskError,
)
from metriqual.errors.classification import (
    NETWORK_STATUS,
    TIMEOUT_STATUS,
    ErrorClass,
    classify_status,
    extract_error_fields,
    is_retryable,
)

__all__ = [
    "ConfigurationError",
    "ErrorClass",
    "ErrorContext",
    "MQLAPIError",
    "MqlError",
    "NETWORK_STATUS",
    "ResponseDecodeError",
    "SpeechTaskError",
    "TIMEOUT_STATUS",
    "VideoTaskError",
    "classify_status",
    "extract_error_fields",
    "is_retryable",
]
