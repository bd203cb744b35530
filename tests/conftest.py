"""Root pytest fixtures for metriqual tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest

from metriqual.resilience import RetryPolicy
from metriqual.transport import HttpTransport

if TYPE_CHECKING:
    from collections.abc import Callable

TEST_BASE_URL = "https://gateway.test"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MQL_* variables from the developer's shell out of tests."""
    for name in (
        "MQL_BASE_URL",
        "MQL_API_KEY",
        "MQL_TOKEN",
        "MQL_TIMEOUT_MS",
        "MQL_MAX_RETRIES",
        "MQL_RETRY_JITTER",
        "MQL_HTTP_TRUST_ENV",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return TEST_BASE_URL


@pytest.fixture
def backoff_delays(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record retry delays instead of sleeping through them."""
    delays: list[float] = []

    async def fake_wait(self: RetryPolicy, delay_ms: float) -> None:
        delays.append(delay_ms)

    monkeypatch.setattr(RetryPolicy, "_wait", fake_wait)
    return delays


@pytest.fixture
def make_transport(base_url: str) -> Callable[..., HttpTransport]:
    """Build an HttpTransport whose requests are answered by ``handler``.

    The handler receives each httpx.Request and returns an httpx.Response
    (or raises, to simulate a transport failure).
    """

    def factory(handler: Callable[[httpx.Request], Any], **overrides: Any) -> HttpTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        overrides.setdefault("base_url", base_url)
        return HttpTransport(http_client=client, **overrides)

    return factory
