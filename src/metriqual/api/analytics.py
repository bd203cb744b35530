"""
Analytics API - usage overview, timeseries and per-key usage.

Dates may be passed as ISO 8601 strings or datetime objects.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from urllib.parse import quote

from metriqual.types import (
    AnalyticsOverview,
    ProviderStats,
    TimeseriesPoint,
    UsageAnalyticsResponse,
    UsageLogsResponse,
    decode,
    decode_list,
)

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport
    from metriqual.transport.http import QueryValue

ANALYTICS_PATH = "/v1/analytics"
USER_KEYS_PATH = "/v1/user/proxy-keys"

# Covers datetime too, which subclasses date
DateLike = str | date


def _date_params(
    start_date: DateLike | None, end_date: DateLike | None
) -> dict[str, QueryValue]:
    def render(value: DateLike | None) -> str | None:
        if isinstance(value, date):
            return value.isoformat()
        return value

    return {"start_date": render(start_date), "end_date": render(end_date)}


def _org_analytics_path(org_id: str) -> str:
    return f"/v1/organizations/{quote(org_id, safe='')}/analytics"


class AnalyticsAPI:
    """Usage analytics for the current user, a proxy key or an organization.

    Example:
        >>> overview = await admin.analytics.get_overview(
        ...     start_date="2024-01-01", end_date="2024-01-31"
        ... )
        >>> print(f"Total cost: ${overview.total_cost:.2f}")
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def get_overview(
        self,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
    ) -> AnalyticsOverview:
        """Totals for requests, tokens, cost and average latency."""
        data = await self._transport.get(
            f"{ANALYTICS_PATH}/overview", params=_date_params(start_date, end_date)
        )
        return decode(AnalyticsOverview, data)

    async def get_timeseries(
        self,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
    ) -> list[TimeseriesPoint]:
        """Hourly aggregates."""
        data = await self._transport.get(
            f"{ANALYTICS_PATH}/timeseries", params=_date_params(start_date, end_date)
        )
        return decode_list(TimeseriesPoint, data)

    async def get_provider_stats(self) -> list[ProviderStats]:
        """Breakdown by provider and model."""
        data = await self._transport.get(f"{ANALYTICS_PATH}/providers")
        return decode_list(ProviderStats, data)

    async def get_usage_logs(self, proxy_key_id: str) -> UsageLogsResponse:
        """Request logs of one proxy key."""
        data = await self._transport.get(
            f"{USER_KEYS_PATH}/{quote(proxy_key_id, safe='')}/logs"
        )
        return decode(UsageLogsResponse, data)

    async def get_usage_analytics(self, proxy_key_id: str) -> UsageAnalyticsResponse:
        """Aggregated usage of one proxy key, by model."""
        data = await self._transport.get(
            f"{USER_KEYS_PATH}/{quote(proxy_key_id, safe='')}/usage"
        )
        return decode(UsageAnalyticsResponse, data)

    # Organization-scoped; the gateway may answer 404 where these are not enabled.

    async def get_org_overview(
        self,
        org_id: str,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
    ) -> AnalyticsOverview:
        data = await self._transport.get(
            f"{_org_analytics_path(org_id)}/overview",
            params=_date_params(start_date, end_date),
        )
        return decode(AnalyticsOverview, data)

    async def get_org_timeseries(
        self,
        org_id: str,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
    ) -> list[TimeseriesPoint]:
        data = await self._transport.get(
            f"{_org_analytics_path(org_id)}/timeseries",
            params=_date_params(start_date, end_date),
        )
        return decode_list(TimeseriesPoint, data)

    async def get_org_provider_stats(self, org_id: str) -> list[ProviderStats]:
        data = await self._transport.get(f"{_org_analytics_path(org_id)}/providers")
        return decode_list(ProviderStats, data)
