"""
Core MQL client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from metriqual.api import (
    AnalyticsAPI,
    AudioAPI,
    ChatAPI,
    EmbeddingsAPI,
    ImagesAPI,
    ModelsAPI,
    OrganizationsAPI,
    ProxyKeysAPI,
    VideoAPI,
    WebhooksAPI,
)
from metriqual.transport import ClientConfig, HttpTransport

if TYPE_CHECKING:
    import httpx

    from metriqual.resilience import JitterStrategy


class MQL:
    """Client for the MQL AI proxy gateway.

    One transport is shared by every resource API of a client instance.

    Example:
        >>> async with MQL(api_key="mql-...") as mql:
        ...     reply = await mql.chat.complete([ChatMessage.user("Hello!")])

        >>> # Management calls need a session token
        >>> admin = mql.with_auth(token="eyJ...")
        >>> keys = await admin.proxy_keys.list()
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        token: str | None = None,
        timeout_ms: int | None = None,
        max_retries: int | None = None,
        retry_jitter: JitterStrategy | str | None = None,
        http_client: httpx.AsyncClient | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        """Create a client.

        Args:
            base_url: Gateway URL (default: https://api.metriqual.com)
            api_key: Proxy key for chat completions (starts with 'mql-')
            token: Session token for management operations
            timeout_ms: Per-attempt timeout (default: 30000)
            max_retries: Retries on 5xx/network errors (default: 3)
            retry_jitter: Backoff jitter, "none", "full" or "equal" (default: none)
            http_client: Custom httpx.AsyncClient
            config: Complete config; keyword arguments override its fields

        Unset options fall back to MQL_* environment variables.
        """
        overrides: dict[str, Any] = {
            k: v
            for k, v in {
                "base_url": base_url,
                "api_key": api_key,
                "token": token,
                "timeout_ms": timeout_ms,
                "max_retries": max_retries,
                "retry_jitter": retry_jitter,
                "http_client": http_client,
            }.items()
            if v is not None
        }

        if config is None:
            config = ClientConfig.from_env(**overrides)
        elif overrides:
            config = config.with_overrides(**overrides)

        self._init_from_transport(HttpTransport(config))

    def _init_from_transport(self, transport: HttpTransport) -> None:
        self._transport = transport

        self.chat = ChatAPI(transport)
        """Chat completions API (OpenAI compatible)"""

        self.models = ModelsAPI(transport)
        """Models listing API"""

        self.embeddings = EmbeddingsAPI(transport)
        """Embeddings API"""

        self.proxy_keys = ProxyKeysAPI(transport)
        """Proxy keys management API"""

        self.audio = AudioAPI(transport)
        """Speech, transcription and voice API"""

        self.images = ImagesAPI(transport)
        """Image generation API"""

        self.video = VideoAPI(transport)
        """Video generation API"""

        self.webhooks = WebhooksAPI(transport)
        """Webhooks management API"""

        self.organizations = OrganizationsAPI(transport)
        """Organizations, members and invitations API"""

        self.analytics = AnalyticsAPI(transport)
        """Usage analytics API"""

    @classmethod
    def from_transport(cls, transport: HttpTransport) -> MQL:
        """Wrap an existing transport."""
        client = cls.__new__(cls)
        client._init_from_transport(transport)
        return client

    def with_auth(
        self,
        *,
        api_key: str | None = None,
        token: str | None = None,
    ) -> MQL:
        """Create a client with different credentials.

        Base URL, timeout, retries and HTTP client are carried over; a
        credential passed as None keeps its current value.
        """
        return MQL.from_transport(self._transport.with_auth(api_key=api_key, token=token))

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    @property
    def config(self) -> ClientConfig:
        return self._transport.config

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def __aenter__(self) -> MQL:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
