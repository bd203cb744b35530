"""
Models API - list models available through the gateway.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from metriqual.types import Model, ModelListResponse, decode

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport


class ModelsAPI:
    """Model listing.

    Example:
        >>> models = await mql.models.list()
        >>> for model in models.data:
        ...     print(model.id, model.owned_by)
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def list(self) -> ModelListResponse:
        """List all available models."""
        return decode(ModelListResponse, await self._transport.get("/v1/models"))

    async def list_by_provider(self, provider: str) -> ModelListResponse:
        """List models of one provider (e.g. "openai", "anthropic")."""
        data = await self._transport.get(f"/{quote(provider, safe='')}/v1/models")
        return decode(ModelListResponse, data)

    async def get(self, model_id: str) -> Model:
        """Get a single model by ID."""
        data = await self._transport.get(f"/v1/models/{quote(model_id, safe='')}")
        return decode(Model, data)
