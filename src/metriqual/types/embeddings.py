"""
Embedding types.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from metriqual.types.base import MqlModel


class EmbeddingRequest(MqlModel):
    """Embedding request.

    Attributes:
        model: e.g. "text-embedding-3-small"
        input: Text, list of texts, or token arrays
        encoding_format: "float" (default) or "base64"
        dimensions: Output dimensions (text-embedding-3 and later)
    """

    model: str
    input: str | list[str] | list[int] | list[list[int]]
    encoding_format: Literal["float", "base64"] | None = None
    dimensions: int | None = Field(default=None, gt=0)
    user: str | None = None


class EmbeddingObject(MqlModel):
    object: str = "embedding"
    embedding: list[float] | str
    index: int = 0


class EmbeddingUsage(MqlModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingResponse(MqlModel):
    object: str = "list"
    data: list[EmbeddingObject] = Field(default_factory=list)
    model: str = ""
    usage: EmbeddingUsage = Field(default_factory=EmbeddingUsage)

    @property
    def vectors(self) -> list[list[float] | str]:
        """Embeddings in request order."""
        return [item.embedding for item in sorted(self.data, key=lambda d: d.index)]
