"""
Shared model base and the decode step between transport and resources.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from metriqual.errors import ResponseDecodeError

M = TypeVar("M", bound=BaseModel)


class MqlModel(BaseModel):
    """Base for gateway payloads.

    Unknown fields are kept so newer gateway responses still decode.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a request body, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DeleteResponse(MqlModel):
    """Acknowledgement returned by delete endpoints."""

    message: str | None = None


def decode(model: type[M], data: Any) -> M:
    """Validate a decoded JSON value against ``model``.

    Args:
        model: Target pydantic model
        data: Parsed JSON from the transport

    Returns:
        Model instance

    Raises:
        ResponseDecodeError: If the payload does not match the model
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ResponseDecodeError(
            f"Unexpected {model.__name__} payload: {e.error_count()} validation error(s)",
            model=model.__name__,
            errors=e.errors(include_url=False),
        ) from e


def decode_list(model: type[M], data: Any, *, envelope: str | None = None) -> list[M]:
    """Validate a JSON array whose items match ``model``.

    Args:
        model: Item model
        data: Parsed JSON from the transport
        envelope: Key under which the array may be wrapped in an object

    Raises:
        ResponseDecodeError: If the payload is not an array of ``model``
    """
    if envelope is not None and isinstance(data, dict) and envelope in data:
        data = data[envelope]
    if not isinstance(data, list):
        raise ResponseDecodeError(
            f"Expected a list of {model.__name__}, got {type(data).__name__}",
            model=model.__name__,
        )
    return [decode(model, item) for item in data]
