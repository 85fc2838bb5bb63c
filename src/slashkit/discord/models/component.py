from __future__ import annotations
from slashkit.discord.enums import ComponentType, TextInputStyle, ButtonStyle, ChannelType
from pydantic import Discriminator, Tag, model_validator, model_serializer
from slashkit.discord.types import Snowflake
from typing import Annotated, Any
from .base import PayloadModel


__all__ = (
    'ActionRow',
    'Button',
    'Component',
    'PartialEmoji',
    'SelectMenu',
    'SelectOption',
    'TextInput',
    'UnknownComponent',
)


class PartialEmoji(PayloadModel):
    id: Snowflake | None = None
    name: str | None = None
    animated: bool | None = None


class Button(PayloadModel):
    type: ComponentType = ComponentType.BUTTON
    style: ButtonStyle
    label: str | None = None
    emoji: PartialEmoji | None = None
    custom_id: str | None = None
    """developer-defined identifier, not allowed for LINK buttons"""
    sku_id: Snowflake | None = None
    url: str | None = None
    """only for LINK buttons"""
    disabled: bool | None = None


class SelectOption(PayloadModel):
    label: str
    value: str
    description: str | None = None
    emoji: PartialEmoji | None = None
    default: bool | None = None


class SelectMenu(PayloadModel):
    type: ComponentType = ComponentType.STRING_SELECT
    """any of the five select menu types"""
    custom_id: str
    options: tuple[SelectOption, ...] | None = None
    """only for STRING_SELECT"""
    channel_types: tuple[ChannelType, ...] | None = None
    """only for CHANNEL_SELECT"""
    placeholder: str | None = None
    min_values: int | None = None
    max_values: int | None = None
    disabled: bool | None = None
    values: tuple[str, ...] | None = None
    """selected values, only present in component interaction data"""


class TextInput(PayloadModel):
    type: ComponentType = ComponentType.TEXT_INPUT
    custom_id: str
    style: TextInputStyle | None = None
    """required when sent, absent when submitted"""
    label: str | None = None
    """required when sent, absent when submitted"""
    min_length: int | None = None
    max_length: int | None = None
    required: bool | None = None
    value: str | None = None
    placeholder: str | None = None


class UnknownComponent(PayloadModel):
    """a component type this library does not model, kept as sent"""
    type: int
    raw: dict[str, Any]

    @model_validator(mode='before')
    @classmethod
    def _wrap_raw(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, dict) and 'raw' not in data:
            return {'type': data.get('type'), 'raw': data}

        return data

    @model_serializer
    def _serialize_raw(self) -> dict[str, Any]:
        return self.raw


def _component_tag(value: Any) -> str:  # noqa: ANN401
    component_type = (
        value.get('type')
        if isinstance(value, dict) else
        getattr(value, 'type', None)
    )

    try:
        component_type = ComponentType(component_type)
    except ValueError:
        return 'unknown'

    match component_type:
        case ComponentType.ACTION_ROW:
            return 'action_row'
        case ComponentType.BUTTON:
            return 'button'
        case ComponentType.TEXT_INPUT:
            return 'text_input'
        case _ if component_type.is_select:
            return 'select'

    return 'unknown'


Component = Annotated[
    Annotated['ActionRow', Tag('action_row')] |
    Annotated[Button, Tag('button')] |
    Annotated[SelectMenu, Tag('select')] |
    Annotated[TextInput, Tag('text_input')] |
    Annotated[UnknownComponent, Tag('unknown')],
    Discriminator(_component_tag)
]


class ActionRow(PayloadModel):
    type: ComponentType = ComponentType.ACTION_ROW
    components: tuple[Component, ...] = ()

    @property
    def text_inputs(self) -> list[TextInput]:
        return [
            component
            for component in self.components
            if isinstance(component, TextInput)
        ]


ActionRow.model_rebuild()
