from __future__ import annotations
from .checks import CHOICE_VALUE_MAX_LENGTH, CHOICE_NAME_LENGTH, SAFE_INTEGER, check_length
from slashkit.errors import TypeMismatch, RangeViolation, LengthViolation
from slashkit.discord.enums import ApplicationCommandOptionType
from typing import Annotated, Any
from .base import PayloadModel
from pydantic import Field


__all__ = (
    'Choice',
    'ChoiceValue',
    'check_choice',
    'check_value',
    'value_matches',
)


ChoiceValue = str | int | float
"""the runtime type is the tag, `bool` is never a choice value"""

_VALUE_TYPES: dict[ApplicationCommandOptionType, type] = {
    ApplicationCommandOptionType.STRING: str,
    ApplicationCommandOptionType.INTEGER: int,
    ApplicationCommandOptionType.NUMBER: float,
}


class Choice(PayloadModel):
    name: str
    """1-100 character choice name"""
    name_localizations: dict[str, str] | None = None
    value: Annotated[ChoiceValue, Field(strict=True)]
    """value for the choice, up to 100 characters if string"""


def value_matches(
    kind: ApplicationCommandOptionType,
    value: Any  # noqa: ANN401
) -> bool:
    expected = _VALUE_TYPES.get(kind)
    # ? exact type, bool is an int subclass
    return expected is not None and type(value) is expected


def check_value(
    path: str,
    kind: ApplicationCommandOptionType,
    value: Any  # noqa: ANN401
) -> None:
    """value must carry the variant of `kind` and sit in the safe integer range"""
    if not value_matches(kind, value):
        raise TypeMismatch(
            path,
            f'{kind.name} expects {_VALUE_TYPES[kind].__name__}'
            f', got {type(value).__name__}'
            if kind in _VALUE_TYPES else
            f'{kind.name} does not take values'
        )

    if isinstance(value, int | float) and not -SAFE_INTEGER <= value <= SAFE_INTEGER:
        raise RangeViolation(
            path, f'{value} is outside of [-2^53, 2^53]')


def check_choice(
    path: str,
    kind: ApplicationCommandOptionType,
    name: str,
    value: Any  # noqa: ANN401
) -> None:
    check_length(f'{path}.name', name, CHOICE_NAME_LENGTH)
    check_value(f'{path}.value', kind, value)

    if isinstance(value, str) and len(value) > CHOICE_VALUE_MAX_LENGTH:
        raise LengthViolation(
            f'{path}.value',
            f'must be at most {CHOICE_VALUE_MAX_LENGTH} characters, got {len(value)}'
        )
