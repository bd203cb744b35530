"""
Webhook types.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from metriqual.types.base import MqlModel

WebhookEvent = Literal[
    "usage.threshold",
    "fallback.activated",
    "provider.exhausted",
    "filter.blocked",
    "filter.warned",
    "request.completed",
    "error.occurred",
]


class CreateWebhookRequest(MqlModel):
    url: str
    events: list[WebhookEvent]
    secret: str | None = None


class UpdateWebhookRequest(MqlModel):
    """Partial update; unset fields are left unchanged on the gateway."""

    url: str | None = None
    events: list[WebhookEvent] | None = None
    secret: str | None = None
    enabled: bool | None = None


class Webhook(MqlModel):
    id: str
    user_id: str | None = None
    org_id: str | None = None
    url: str
    # Kept as plain strings so events added by the gateway still decode.
    events: list[str] = Field(default_factory=list)
    secret: str | None = None
    enabled: bool = True
    created_at: str | None = None
    updated_at: str | None = None
