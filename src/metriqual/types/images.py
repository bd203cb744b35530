"""
Image generation types.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from metriqual.types.base import MqlModel


class ImageGenerationRequest(MqlModel):
    model: str
    prompt: str
    n: int | None = Field(default=None, ge=1, le=10)
    size: str | None = None
    quality: Literal["auto", "high", "medium", "low"] | None = None
    style: Literal["natural", "vivid"] | None = None
    output_format: Literal["png", "jpeg", "webp"] | None = None
    response_format: Literal["url", "b64_json"] | None = None
    background: Literal["auto", "transparent", "opaque"] | None = None


class ImageData(MqlModel):
    url: str | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None


class ImageGenerationResponse(MqlModel):
    created: int = 0
    data: list[ImageData] = Field(default_factory=list)
    provider: str | None = None
    model: str | None = None

    @property
    def urls(self) -> list[str]:
        return [image.url for image in self.data if image.url]


class SubjectReference(MqlModel):
    image: str
    weight: float | None = Field(default=None, ge=0.0, le=2.0)


class MinimaxImageRequest(MqlModel):
    """Request for the ``image-01`` model family."""

    model: str = "image-01"
    prompt: str = Field(max_length=1500)
    aspect_ratio: (
        Literal["1:1", "16:9", "4:3", "3:2", "2:3", "3:4", "9:16", "21:9"] | None
    ) = None
    width: int | None = Field(default=None, ge=512, le=2048, multiple_of=8)
    height: int | None = Field(default=None, ge=512, le=2048, multiple_of=8)
    n: int | None = Field(default=None, ge=1, le=9)
    response_format: Literal["url", "base64"] | None = None
    seed: int | None = None
    prompt_optimizer: bool | None = None
    subject_reference: list[SubjectReference] | None = None


class MinimaxImageResponse(MqlModel):
    object: str = "image.minimax"
    model: str = ""
    id: str = ""
    data: list[ImageData] = Field(default_factory=list)
    latency_ms: int = 0
