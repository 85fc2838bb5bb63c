from __future__ import annotations
from pydantic import ValidationError as PydanticValidationError
from slashkit.errors import MalformedPayload
from pydantic import BaseModel, ConfigDict
from orjson import loads, JSONDecodeError
from typing import Any, Self


__all__ = (
    'PayloadModel',
    'load_payload',
)


def load_payload(payload: dict | str | bytes) -> dict[str, Any]:
    if isinstance(payload, dict):
        return payload

    try:
        data = loads(payload)
    except JSONDecodeError as e:
        raise MalformedPayload(f'payload is not valid json: {e}') from e

    if not isinstance(data, dict):
        raise MalformedPayload(
            f'expected a json object, got {type(data).__name__}')

    return data


class PayloadModel(BaseModel):
    """frozen wire model, built values are never mutated after validation"""
    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_payload(cls, payload: dict | str | bytes) -> Self:
        try:
            return cls.model_validate(load_payload(payload))
        except PydanticValidationError as e:
            raise MalformedPayload(
                f'invalid {cls.__name__} payload: {e}') from e

    def as_payload(self) -> dict:
        return self.model_dump(mode='json', exclude_none=True)
