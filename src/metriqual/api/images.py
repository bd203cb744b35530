"""
Images API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from metriqual.types import (
    ImageGenerationRequest,
    ImageGenerationResponse,
    MinimaxImageRequest,
    MinimaxImageResponse,
    decode,
)

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport

GENERATIONS_PATH = "/v1/images/generations"
MINIMAX_GENERATIONS_PATH = "/v1/images/minimax/generations"


class ImagesAPI:
    """Image generation.

    Example:
        >>> response = await mql.images.generate(
        ...     ImageGenerationRequest(model="dall-e-3", prompt="A siamese cat", size="1024x1024")
        ... )
        >>> print(response.data[0].url)
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def generate(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        """Generate images from a text prompt."""
        data = await self._transport.post(GENERATIONS_PATH, request.to_payload())
        return decode(ImageGenerationResponse, data)

    async def generate_base64(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        """Generate images returned as base64 data."""
        return await self.generate(request.model_copy(update={"response_format": "b64_json"}))

    async def generate_urls(self, request: ImageGenerationRequest) -> list[str]:
        """Generate images and return their URLs."""
        response = await self.generate(request.model_copy(update={"response_format": "url"}))
        return response.urls

    async def generate_minimax(self, request: MinimaxImageRequest) -> MinimaxImageResponse:
        """Generate images with the ``image-01`` model family."""
        data = await self._transport.post(MINIMAX_GENERATIONS_PATH, request.to_payload())
        return decode(MinimaxImageResponse, data)
