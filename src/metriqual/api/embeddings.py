"""
Embeddings API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from metriqual.types import EmbeddingRequest, EmbeddingResponse, decode

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport


class EmbeddingsAPI:
    """Embedding generation.

    Example:
        >>> response = await mql.embeddings.create(
        ...     EmbeddingRequest(model="text-embedding-3-small", input="Hello")
        ... )
        >>> print(len(response.vectors[0]))
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def create(self, request: EmbeddingRequest) -> EmbeddingResponse:
        """Create embeddings for one or more inputs."""
        data = await self._transport.post("/v1/embeddings", request.to_payload())
        return decode(EmbeddingResponse, data)

    async def embed(
        self,
        model: str,
        input: str | list[str],
        dimensions: int | None = None,
    ) -> EmbeddingResponse:
        """Shorthand for ``create`` with the common fields."""
        return await self.create(
            EmbeddingRequest(model=model, input=input, dimensions=dimensions)
        )
