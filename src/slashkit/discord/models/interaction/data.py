from __future__ import annotations
from slashkit.discord.enums import ApplicationCommandOptionType, ApplicationCommandType, ComponentType
from slashkit.discord.models.component import ActionRow
from slashkit.discord.models.user import User, Member
from slashkit.discord.models.base import PayloadModel
from slashkit.discord.types import Snowflake
from pydantic import Field
from typing import Any


__all__ = (
    'CommandData',
    'CommandDataOption',
    'ComponentData',
    'ModalData',
    'OptionValue',
    'Resolved',
)


OptionValue = bool | int | float | str
"""user input, ids of users, channels, roles, and attachments arrive as strings"""


class Resolved(PayloadModel):
    users: dict[Snowflake, User] | None = None
    members: dict[Snowflake, Member] | None = None
    """partial members, `user` is only present in `users`"""
    roles: dict[Snowflake, dict[str, Any]] | None = None
    channels: dict[Snowflake, dict[str, Any]] | None = None
    messages: dict[Snowflake, dict[str, Any]] | None = None
    attachments: dict[Snowflake, dict[str, Any]] | None = None


class CommandDataOption(PayloadModel):
    name: str
    """Name of the parameter"""
    type: ApplicationCommandOptionType
    """Value of application command option type"""
    value: OptionValue | None = None
    """Value of the option resulting from user input"""
    options: tuple[CommandDataOption, ...] | None = None
    """Present if this option is a group or subcommand"""
    focused: bool | None = None
    """`true` if this option is the currently focused option for autocomplete"""

    def option(self, name: str) -> CommandDataOption | None:
        for option in self.options or ():
            if option.name == name:
                return option

        return None


class CommandData(PayloadModel):
    id: Snowflake
    """`ID` of the invoked command"""
    name: str
    """`name` of the invoked command"""
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    resolved: Resolved | None = None
    """Converted users + roles + channels + attachments"""
    options: tuple[CommandDataOption, ...] | None = None
    """Params + values from the user"""
    guild_id: Snowflake | None = None
    """ID of the guild the command is registered to"""
    target_id: Snowflake | None = None
    """ID of the user or message targeted by a user or message command"""

    def option(self, name: str) -> CommandDataOption | None:
        for option in self.options or ():
            if option.name == name:
                return option

        return None

    def _leaf(self) -> tuple[tuple[str, ...], tuple[CommandDataOption, ...]]:
        path = [self.name]
        options = self.options or ()

        # ? discord sends exactly one sub-command (or group) per level
        while len(options) == 1 and options[0].type.is_subcommand:
            path.append(options[0].name)
            options = options[0].options or ()

        return tuple(path), options

    def command_path(self) -> tuple[str, ...]:
        """names from the command down to the invoked sub-command

        e.g. `('config', 'proxy', 'set')` for `/config proxy set`
        """
        return self._leaf()[0]

    def option_values(self) -> dict[str, OptionValue | None]:
        """parameter name to value for the invoked (sub-)command"""
        return {
            option.name: option.value
            for option in self._leaf()[1]
        }

    def focused_option(self) -> CommandDataOption | None:
        for option in self._leaf()[1]:
            if option.focused:
                return option

        return None


class ComponentData(PayloadModel):
    custom_id: str
    """`custom_id` of the component"""
    component_type: ComponentType | int = Field(union_mode='left_to_right')
    """`type` of the component, unknown types are kept as their code"""
    values: tuple[str, ...] | None = None
    """Values the user selected in a select menu component"""
    resolved: Resolved | None = None


class ModalData(PayloadModel):
    custom_id: str
    """`custom_id` of the modal"""
    components: tuple[ActionRow, ...] = ()
    """Values submitted by the user"""

    def values(self) -> dict[str, str | None]:
        return {
            text_input.custom_id: text_input.value
            for row in self.components
            for text_input in row.text_inputs
        }
