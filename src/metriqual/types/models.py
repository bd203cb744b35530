"""
Model listing types.
"""

from __future__ import annotations

from pydantic import Field

from metriqual.types.base import MqlModel


class Model(MqlModel):
    id: str
    object: str = "model"
    created: int = 0
    owned_by: str = ""


class ModelListResponse(MqlModel):
    object: str = "list"
    data: list[Model] = Field(default_factory=list)
