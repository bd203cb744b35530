"""
Proxy keys API.

Management endpoints; these require a session token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from metriqual.types import (
    ChatCompletionResponse,
    CreateProxyKeyRequest,
    CreateProxyKeyResponse,
    DeleteResponse,
    ProxyKeyListResponse,
    ProxyKeyTestRequest,
    ProxyKeyUsageResponse,
    RegenerateProxyKeyResponse,
    decode,
)

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport

USER_KEYS_PATH = "/v1/user/proxy-keys"


def _org_keys_path(org_id: str) -> str:
    return f"/v1/organizations/{quote(org_id, safe='')}/proxy-keys"


class ProxyKeysAPI:
    """Proxy key management.

    Example:
        >>> created = await mql.with_auth(token=jwt).proxy_keys.create(
        ...     CreateProxyKeyRequest(providers=[
        ...         ProviderConfig(provider="openai", model="gpt-4o-mini",
        ...                        api_key="sk-...", usage_limit=100),
        ...     ])
        ... )
        >>> print(created.proxy_key)
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def list(self) -> ProxyKeyListResponse:
        """List the current user's proxy keys."""
        return decode(ProxyKeyListResponse, await self._transport.get(USER_KEYS_PATH))

    async def create(self, request: CreateProxyKeyRequest) -> CreateProxyKeyResponse:
        """Create a proxy key with a provider fallback chain."""
        data = await self._transport.post(USER_KEYS_PATH, request.to_payload())
        return decode(CreateProxyKeyResponse, data)

    async def get_usage(self, key_id: str) -> ProxyKeyUsageResponse:
        """Get per-provider usage for a proxy key."""
        data = await self._transport.get(f"{USER_KEYS_PATH}/{quote(key_id, safe='')}/usage")
        return decode(ProxyKeyUsageResponse, data)

    async def delete(self, key_id: str) -> DeleteResponse:
        """Delete a proxy key."""
        data = await self._transport.delete(f"{USER_KEYS_PATH}/{quote(key_id, safe='')}")
        return decode(DeleteResponse, data)

    async def regenerate(self, key_id: str) -> RegenerateProxyKeyResponse:
        """Issue a new secret for an existing proxy key."""
        data = await self._transport.post(
            f"{USER_KEYS_PATH}/{quote(key_id, safe='')}/regenerate"
        )
        return decode(RegenerateProxyKeyResponse, data)

    async def test(self, key_id: str, request: ProxyKeyTestRequest) -> ChatCompletionResponse:
        """Send a test completion through a proxy key."""
        data = await self._transport.post(
            f"{USER_KEYS_PATH}/{quote(key_id, safe='')}/test", request.to_payload()
        )
        return decode(ChatCompletionResponse, data)

    async def list_for_org(self, org_id: str) -> ProxyKeyListResponse:
        """List an organization's proxy keys."""
        return decode(ProxyKeyListResponse, await self._transport.get(_org_keys_path(org_id)))

    async def create_for_org(
        self, org_id: str, request: CreateProxyKeyRequest
    ) -> CreateProxyKeyResponse:
        """Create a proxy key owned by an organization."""
        data = await self._transport.post(_org_keys_path(org_id), request.to_payload())
        return decode(CreateProxyKeyResponse, data)

    async def delete_for_org(self, org_id: str, key_id: str) -> DeleteResponse:
        """Delete an organization's proxy key."""
        data = await self._transport.delete(
            f"{_org_keys_path(org_id)}/{quote(key_id, safe='')}"
        )
        return decode(DeleteResponse, data)

    async def regenerate_for_org(
        self, org_id: str, key_id: str
    ) -> RegenerateProxyKeyResponse:
        """Issue a new secret for an organization's proxy key."""
        data = await self._transport.post(
            f"{_org_keys_path(org_id)}/{quote(key_id, safe='')}/regenerate"
        )
        return decode(RegenerateProxyKeyResponse, data)
