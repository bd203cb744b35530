"""
Proxy key types.

A proxy key bundles an ordered list of provider credentials; the gateway
routes to the first provider and falls back down the list as usage limits
are reached.
"""

from __future__ import annotations

from pydantic import Field

from metriqual.types.base import MqlModel
from metriqual.types.chat import ChatMessage


class ProviderConfig(MqlModel):
    """One provider in a proxy key's fallback chain."""

    provider: str
    model: str
    api_key: str = Field(repr=False)
    usage_limit: int


class ProviderStatus(MqlModel):
    provider: str
    model: str | None = None
    priority: int = 0
    usage_limit: int = 0
    usage_count: int = 0
    remaining: int = 0
    is_exhausted: bool = False


class CreateProxyKeyRequest(MqlModel):
    providers: list[ProviderConfig]
    filter_ids: list[str] | None = None
    system_prompt_ids: list[str] | None = None


class CreateProxyKeyResponse(MqlModel):
    proxy_key: str
    providers: list[ProviderStatus] = Field(default_factory=list)
    created_at: str = ""


class ProxyKeyListItem(MqlModel):
    id: str
    key_preview: str = ""
    org_id: str | None = None
    created_at: str = ""
    total_usage_dollars: float = 0.0
    provider_count: int = 0
    active_provider: str | None = None
    all_exhausted: bool = False


class ProxyKeyListResponse(MqlModel):
    keys: list[ProxyKeyListItem] = Field(default_factory=list)
    count: int = 0


class ProxyKeyUsageResponse(MqlModel):
    proxy_key: str = ""
    providers: list[ProviderStatus] = Field(default_factory=list)
    active_provider: str | None = None
    all_exhausted: bool = False


class RegenerateProxyKeyResponse(MqlModel):
    proxy_key: str
    id: str
    providers: list[ProviderStatus] = Field(default_factory=list)
    message: str = ""


class ProxyKeyTestRequest(MqlModel):
    model: str
    messages: list[ChatMessage]
    stream: bool | None = None
