"""
Telemetry - structured logging with credential masking.
"""

from metriqual.telemetry.logger import (
    JsonFormatter,
    LogLevel,
    MqlLogger,
    SensitiveDataMasker,
    TextFormatter,
    get_logger,
)

__all__ = [
    "JsonFormatter",
    "LogLevel",
    "MqlLogger",
    "SensitiveDataMasker",
    "TextFormatter",
    "get_logger",
]
