"""
Webhooks API.

Management endpoints; these require a session token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from metriqual.types import (
    CreateWebhookRequest,
    DeleteResponse,
    UpdateWebhookRequest,
    Webhook,
    decode,
    decode_list,
)

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport

WEBHOOKS_PATH = "/v1/webhooks"


class WebhooksAPI:
    """Webhook subscriptions for gateway events.

    Example:
        >>> hook = await admin.webhooks.create(
        ...     CreateWebhookRequest(
        ...         url="https://api.example.com/hooks",
        ...         events=["fallback.activated", "provider.exhausted"],
        ...         secret="signing-secret",
        ...     )
        ... )
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def list(self) -> list[Webhook]:
        """List the current user's webhooks."""
        data = await self._transport.get(WEBHOOKS_PATH)
        return decode_list(Webhook, data, envelope="webhooks")

    async def create(self, request: CreateWebhookRequest) -> Webhook:
        """Subscribe a URL to gateway events."""
        data = await self._transport.post(WEBHOOKS_PATH, request.to_payload())
        return decode(Webhook, data)

    async def update(self, webhook_id: str, request: UpdateWebhookRequest) -> Webhook:
        """Change a webhook; only the fields set on ``request`` are sent."""
        data = await self._transport.patch(
            f"{WEBHOOKS_PATH}/{quote(webhook_id, safe='')}", request.to_payload()
        )
        return decode(Webhook, data)

    async def delete(self, webhook_id: str) -> DeleteResponse:
        """Delete a webhook."""
        data = await self._transport.delete(f"{WEBHOOKS_PATH}/{quote(webhook_id, safe='')}")
        return decode(DeleteResponse, data)
