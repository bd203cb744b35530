"""
Usage analytics types.
"""

from __future__ import annotations

from pydantic import Field

from metriqual.types.base import MqlModel


class AnalyticsOverview(MqlModel):
    total_requests: int = 0
    total_tokens: int = 0
    total_cost: float = 0.0
    avg_latency_ms: float | None = None


class TimeseriesPoint(MqlModel):
    """Hourly aggregate."""

    timestamp: str
    requests: int = 0
    tokens: int = 0
    cost: float = 0.0


class ProviderStats(MqlModel):
    provider: str
    model: str
    requests: int = 0
    tokens: int = 0
    cost: float = 0.0


class UsageLog(MqlModel):
    id: str
    proxy_key: str
    provider: str
    model: str
    request_id: str | None = None
    timestamp: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cost_usd: float = 0.0
    latency_ms: float | None = None
    status_code: int | None = None
    error_message: str | None = None


class UsageLogsResponse(MqlModel):
    proxy_key: str
    logs: list[UsageLog] = Field(default_factory=list)


class ModelUsage(MqlModel):
    provider: str
    model: str
    requests: int = 0
    tokens: int = 0
    cost_usd: float = 0.0


class UsageAnalyticsResponse(MqlModel):
    proxy_key: str
    total_requests: int = 0
    total_tokens: int = 0
    total_cost_usd: float = 0.0
    models: list[ModelUsage] = Field(default_factory=list)
