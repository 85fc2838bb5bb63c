from __future__ import annotations
from slashkit.discord.enums import ApplicationIntegrationType, ApplicationCommandType, InteractionContextType, OptionOrdering, Permission
from .checks import DESCRIPTION_LENGTH, MAX_OPTIONS, check_present, check_length, check_unique, check_count, check_name
from .option import CommandOptionBuilder, CommandOption, validate_option, apply_ordering, check_ordering
from slashkit.errors import BuilderConsumed, IncompatibleField
from slashkit.discord.types import Snowflake
from typing import TYPE_CHECKING, Self
from pydantic import field_validator
from .base import PayloadModel

if TYPE_CHECKING:
    from collections.abc import Iterable


__all__ = (
    'Command',
    'CommandBuilder',
    'validate_command',
)


_SERVER_FIELDS = {'id', 'application_id', 'guild_id', 'version'}


class Command(PayloadModel):
    id: Snowflake | None = None
    """server assigned, only present on parsed commands"""
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    application_id: Snowflake | None = None
    guild_id: Snowflake | None = None
    name: str
    name_localizations: dict[str, str] | None = None
    description: str = ''
    """1-100 characters for CHAT_INPUT, empty for USER and MESSAGE"""
    description_localizations: dict[str, str] | None = None
    options: tuple[CommandOption, ...] | None = None
    default_member_permissions: Permission | None = None
    default_permission: bool | None = None  # deprecated
    nsfw: bool | None = None
    contexts: tuple[InteractionContextType, ...] | None = None
    integration_types: tuple[ApplicationIntegrationType, ...] | None = None
    version: Snowflake | None = None
    """autoincrementing version identifier updated during substantial record changes"""

    @field_validator('options', mode='before')
    @classmethod
    def _empty_as_missing(cls, value: object) -> object:
        return value or None

    def as_registration_payload(self) -> dict:
        """wire json without the fields discord assigns"""
        return self.model_dump(
            mode='json',
            exclude_none=True,
            exclude=_SERVER_FIELDS
        )


def validate_command(
    command: Command,
    ordering: OptionOrdering = OptionOrdering.REORDER
) -> Command:
    """validate a command and all of its options

    returns the command with options ordered by `ordering`
    """
    check_present('name', command.name)

    if command.type == ApplicationCommandType.PRIMARY_ENTRY_POINT:
        raise IncompatibleField(
            'type', 'PRIMARY_ENTRY_POINT commands are managed by discord')

    chat_input = command.type == ApplicationCommandType.CHAT_INPUT
    check_name('name', command.name, chat_input=chat_input)

    options = command.options or ()

    if chat_input:
        check_present('description', command.description)
        check_length('description', command.description, DESCRIPTION_LENGTH)
    else:
        if command.description:
            raise IncompatibleField(
                'description',
                f'{command.type.name} commands must have an empty description'
            )

        if options:
            raise IncompatibleField(
                'options', f'{command.type.name} commands cannot have options')

    check_count('options', options, MAX_OPTIONS)
    check_ordering('options', options, ordering)

    validated = [
        validate_option(option, f'options[{index}]', ordering)
        for index, option in enumerate(options)
    ]

    check_unique('options', (option.name for option in validated))

    if any(option.type.is_subcommand for option in validated):
        for index, option in enumerate(validated):
            if not option.type.is_subcommand:
                raise IncompatibleField(
                    f'options[{index}].type',
                    'sub-commands and groups cannot be mixed with parameters'
                )

    return Command.model_validate({
        key: value
        for key, value in {
            **dict(command),
            'description': command.description or '',
            'options': apply_ordering(validated, ordering) or None
        }.items()
        if value is not None
    })


class CommandBuilder:
    """mutable draft of a `Command`, consumed by `build`"""

    def __init__(
        self,
        name: str | None = None,
        description: str | None = None,
        type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    ) -> None:
        self.type = type
        self.name = name
        self.description = description
        self.options: list[CommandOption | CommandOptionBuilder] = []
        self.default_member_permissions: Permission | None = None
        self.default_permission: bool | None = None
        self.nsfw: bool | None = None
        self.contexts: list[InteractionContextType] | None = None
        self.integration_types: list[ApplicationIntegrationType] | None = None
        self.name_localizations: dict[str, str] | None = None
        self.description_localizations: dict[str, str] | None = None
        self.ordering = OptionOrdering.REORDER
        self._consumed = False

    def _check_consumed(self) -> None:
        if self._consumed:
            raise BuilderConsumed(
                f'command builder for `{self.name}` has already been built')

    def with_name(self, name: str) -> Self:
        self._check_consumed()
        self.name = name
        return self

    def with_description(self, description: str) -> Self:
        self._check_consumed()
        self.description = description
        return self

    def with_type(self, type: ApplicationCommandType) -> Self:
        self._check_consumed()
        self.type = type
        return self

    def with_option(self, option: CommandOption | CommandOptionBuilder) -> Self:
        self._check_consumed()
        self.options.append(option)
        return self

    def with_options(
        self,
        options: Iterable[CommandOption | CommandOptionBuilder]
    ) -> Self:
        self._check_consumed()
        self.options.extend(options)
        return self

    def with_default_member_permissions(self, permissions: Permission) -> Self:
        self._check_consumed()
        self.default_member_permissions = permissions
        return self

    def with_default_permission(self, default_permission: bool) -> Self:
        self._check_consumed()
        self.default_permission = default_permission
        return self

    def with_nsfw(self, nsfw: bool = True) -> Self:
        self._check_consumed()
        self.nsfw = nsfw
        return self

    def with_contexts(self, contexts: Iterable[InteractionContextType]) -> Self:
        self._check_consumed()
        self.contexts = list(contexts)
        return self

    def with_integration_types(
        self,
        integration_types: Iterable[ApplicationIntegrationType]
    ) -> Self:
        self._check_consumed()
        self.integration_types = list(integration_types)
        return self

    def with_name_localizations(self, localizations: dict[str, str]) -> Self:
        self._check_consumed()
        self.name_localizations = localizations
        return self

    def with_description_localizations(self, localizations: dict[str, str]) -> Self:
        self._check_consumed()
        self.description_localizations = localizations
        return self

    def with_ordering(self, ordering: OptionOrdering) -> Self:
        self._check_consumed()
        self.ordering = ordering
        return self

    def draft(self) -> Command:
        """unvalidated snapshot of the builder, nested builders included"""
        return Command.model_construct(
            type=self.type,
            name=self.name,
            name_localizations=self.name_localizations,
            description=self.description,
            description_localizations=self.description_localizations,
            options=tuple(
                option.draft()
                if isinstance(option, CommandOptionBuilder) else
                option
                for option in self.options
            ) or None,
            default_member_permissions=self.default_member_permissions,
            default_permission=self.default_permission,
            nsfw=self.nsfw,
            contexts=(
                tuple(self.contexts)
                if self.contexts is not None else
                None
            ),
            integration_types=(
                tuple(self.integration_types)
                if self.integration_types is not None else
                None
            )
        )

    def build(self) -> Command:
        self._check_consumed()
        command = validate_command(self.draft(), self.ordering)
        self._consumed = True
        return command
