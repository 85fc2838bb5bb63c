from __future__ import annotations
from .checks import DESCRIPTION_LENGTH, MAX_LENGTH_RANGE, MIN_LENGTH_RANGE, MAX_CHOICES, MAX_OPTIONS, check_present, check_length, check_unique, check_count, check_name
from slashkit.errors import ConflictingOptions, IncompatibleField, OrderingViolation, BuilderConsumed, RangeViolation, TypeMismatch
from slashkit.discord.enums import ApplicationCommandOptionType, ChannelType, OptionOrdering
from .choice import Choice, ChoiceValue, check_choice, check_value
from pydantic import Field, model_validator, field_validator
from typing import TYPE_CHECKING, Annotated, Any, Self
from .base import PayloadModel

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


__all__ = (
    'CommandOption',
    'CommandOptionBuilder',
    'apply_ordering',
    'check_ordering',
    'join_path',
    'validate_option',
)


_VALUE_KINDS = {
    ApplicationCommandOptionType.STRING,
    ApplicationCommandOptionType.INTEGER,
    ApplicationCommandOptionType.NUMBER,
}

_RANGE_KINDS = {
    ApplicationCommandOptionType.INTEGER,
    ApplicationCommandOptionType.NUMBER,
}


class CommandOption(PayloadModel):
    type: ApplicationCommandOptionType
    name: str
    """1-32 character name, lowercase for chat input"""
    name_localizations: dict[str, str] | None = None
    description: str
    """1-100 character description"""
    description_localizations: dict[str, str] | None = None
    required: bool = False
    """whether the parameter is required or optional, default `False`"""
    choices: tuple[Choice, ...] | None = None
    """choices for the user to pick from, max 25\n
    only valid for STRING, INTEGER, and NUMBER options"""
    options: tuple[CommandOption, ...] | None = None
    """parameters or sub-commands, only valid for SUB_COMMAND and SUB_COMMAND_GROUP"""
    channel_types: tuple[ChannelType, ...] | None = None
    """channels shown will be restricted to these types"""
    min_value: Annotated[int | float | None, Field(strict=True)] = None
    max_value: Annotated[int | float | None, Field(strict=True)] = None
    min_length: int | None = None
    """minimum allowed length, 0-6000"""
    max_length: int | None = None
    """maximum allowed length, 1-6000"""
    autocomplete: bool = False
    """if autocomplete interactions are enabled for this option"""

    @field_validator('choices', 'options', 'channel_types', mode='before')
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:  # noqa: ANN401
        return value or None

    @model_validator(mode='before')
    @classmethod
    def _number_values_as_float(cls, data: Any) -> Any:  # noqa: ANN401
        # ? discord echoes whole NUMBER values as json integers
        if not isinstance(data, dict) or data.get('type') not in {
            ApplicationCommandOptionType.NUMBER,
            ApplicationCommandOptionType.NUMBER.value
        }:
            return data

        data = dict(data)

        for key in ('min_value', 'max_value'):
            if type(data.get(key)) is int:
                data[key] = float(data[key])

        if data.get('choices'):
            data['choices'] = [
                {**choice, 'value': float(choice['value'])}
                if isinstance(choice, dict) and type(choice.get('value')) is int
                else choice
                for choice in data['choices']
            ]

        return data


def join_path(path: str, field: str) -> str:
    return f'{path}.{field}' if path else field


def check_ordering(
    path: str,
    options: Sequence[CommandOption],
    ordering: OptionOrdering
) -> None:
    if ordering is not OptionOrdering.STRICT:
        return

    optional_seen = False
    for index, option in enumerate(options):
        if option.required and optional_seen:
            raise OrderingViolation(
                f'{path}[{index}].required',
                f'required option `{option.name}` follows an optional option'
            )

        optional_seen = optional_seen or not option.required


def apply_ordering(
    options: Sequence[CommandOption],
    ordering: OptionOrdering
) -> tuple[CommandOption, ...]:
    if ordering is OptionOrdering.STRICT:
        return tuple(options)

    # ? sorted is stable, relative order inside each group is preserved
    return tuple(sorted(options, key=lambda option: not option.required))


def _check_nested_kinds(
    path: str,
    parent: ApplicationCommandOptionType,
    options: Sequence[CommandOption]
) -> None:
    for index, option in enumerate(options):
        match parent:
            case ApplicationCommandOptionType.SUB_COMMAND_GROUP:
                if option.type != ApplicationCommandOptionType.SUB_COMMAND:
                    raise IncompatibleField(
                        f'{path}[{index}].type',
                        'a SUB_COMMAND_GROUP may only contain SUB_COMMANDs'
                    )
            case ApplicationCommandOptionType.SUB_COMMAND:
                if option.type.is_subcommand:
                    raise IncompatibleField(
                        f'{path}[{index}].type',
                        f'a SUB_COMMAND may not contain a {option.type.name}'
                    )


def validate_option(
    option: CommandOption,
    path: str = '',
    ordering: OptionOrdering = OptionOrdering.REORDER
) -> CommandOption:
    """validate an option against discord's documented constraints

    checks fail fast in a fixed order, nested options are validated
    recursively with their index in the path, e.g. `options[1].choices[0].value`

    returns the option with nested options ordered by `ordering`
    """
    kind = option.type

    def field(name: str) -> str:
        return join_path(path, name)

    check_present(field('name'), option.name)
    check_present(field('description'), option.description)
    check_name(field('name'), option.name)
    check_length(field('description'), option.description, DESCRIPTION_LENGTH)

    choices = option.choices or ()
    options = option.options or ()

    if option.autocomplete and choices:
        raise ConflictingOptions(
            field('autocomplete'),
            'autocomplete may not be enabled when choices are set'
        )

    if options and not kind.is_subcommand:
        raise IncompatibleField(
            field('options'),
            f'{kind.name} options cannot contain nested options'
        )

    if choices:
        if kind not in _VALUE_KINDS:
            raise IncompatibleField(
                field('choices'), f'{kind.name} options cannot have choices')

        check_count(field('choices'), choices, MAX_CHOICES)

        for index, choice in enumerate(choices):
            check_choice(
                field(f'choices[{index}]'), kind, choice.name, choice.value)

        check_unique(field('choices'), (choice.name for choice in choices))

    if option.autocomplete and kind not in _VALUE_KINDS:
        raise IncompatibleField(
            field('autocomplete'), f'{kind.name} options cannot autocomplete')

    for key in ('min_value', 'max_value'):
        value = getattr(option, key)

        if value is None:
            continue

        if kind not in _RANGE_KINDS:
            raise IncompatibleField(
                field(key), f'{kind.name} options cannot have {key}')

        check_value(field(key), kind, value)

    if (
        option.min_value is not None and
        option.max_value is not None and
        option.min_value > option.max_value
    ):
        raise RangeViolation(
            field('min_value'),
            f'min_value {option.min_value} is greater than max_value {option.max_value}'
        )

    for key, bounds in (
        ('min_length', MIN_LENGTH_RANGE),
        ('max_length', MAX_LENGTH_RANGE)
    ):
        value = getattr(option, key)

        if value is None:
            continue

        if kind != ApplicationCommandOptionType.STRING:
            raise IncompatibleField(
                field(key), f'{kind.name} options cannot have {key}')

        if type(value) is not int:
            raise TypeMismatch(
                field(key), f'expected int, got {type(value).__name__}')

        if not bounds[0] <= value <= bounds[1]:
            raise RangeViolation(
                field(key), f'must be between {bounds[0]} and {bounds[1]}, got {value}')

    if (
        option.min_length is not None and
        option.max_length is not None and
        option.min_length > option.max_length
    ):
        raise RangeViolation(
            field('min_length'),
            f'min_length {option.min_length} is greater than max_length {option.max_length}'
        )

    if option.channel_types and kind != ApplicationCommandOptionType.CHANNEL:
        raise IncompatibleField(
            field('channel_types'),
            f'{kind.name} options cannot have channel_types'
        )

    if not options:
        return _rebuild(option, None)

    check_count(field('options'), options, MAX_OPTIONS)
    _check_nested_kinds(field('options'), kind, options)
    check_unique(field('options'), (nested.name for nested in options))
    check_ordering(field('options'), options, ordering)

    return _rebuild(option, apply_ordering([
        validate_option(nested, field(f'options[{index}]'), ordering)
        for index, nested in enumerate(options)
    ], ordering))


def _rebuild(
    option: CommandOption,
    options: tuple[CommandOption, ...] | None
) -> CommandOption:
    # ? drafts hold constructed choices, dump them so they are validated too
    return CommandOption.model_validate({
        key: value
        for key, value in {
            **dict(option),
            'choices': (
                [choice.model_dump(exclude_none=True) for choice in option.choices]
                if option.choices else
                None
            ),
            'options': options
        }.items()
        if value is not None
    })


class CommandOptionBuilder:
    """mutable draft of a `CommandOption`, consumed by `build`"""

    def __init__(
        self,
        type: ApplicationCommandOptionType,
        name: str | None = None,
        description: str | None = None
    ) -> None:
        self.type = type
        self.name = name
        self.description = description
        self.required = False
        self.choices: list[tuple[str, ChoiceValue, dict[str, str] | None]] = []
        self.options: list[CommandOption | CommandOptionBuilder] = []
        self.channel_types: list[ChannelType] = []
        self.min_value: int | float | None = None
        self.max_value: int | float | None = None
        self.min_length: int | None = None
        self.max_length: int | None = None
        self.autocomplete = False
        self.name_localizations: dict[str, str] | None = None
        self.description_localizations: dict[str, str] | None = None
        self.ordering = OptionOrdering.REORDER
        self._consumed = False

    def _check_consumed(self) -> None:
        if self._consumed:
            raise BuilderConsumed(
                f'option builder for `{self.name}` has already been built')

    def with_name(self, name: str) -> Self:
        self._check_consumed()
        self.name = name
        return self

    def with_description(self, description: str) -> Self:
        self._check_consumed()
        self.description = description
        return self

    def with_required(self, required: bool = True) -> Self:
        self._check_consumed()
        self.required = required
        return self

    def with_choice(
        self,
        name: str,
        value: ChoiceValue,
        name_localizations: dict[str, str] | None = None
    ) -> Self:
        self._check_consumed()
        self.choices.append((name, value, name_localizations))
        return self

    def with_choices(
        self,
        choices: Iterable[Choice | tuple[str, ChoiceValue]]
    ) -> Self:
        self._check_consumed()
        for choice in choices:
            if isinstance(choice, Choice):
                self.choices.append(
                    (choice.name, choice.value, choice.name_localizations))
                continue

            self.with_choice(*choice)

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

    def with_min_value(self, min_value: int | float) -> Self:
        self._check_consumed()
        self.min_value = min_value
        return self

    def with_max_value(self, max_value: int | float) -> Self:
        self._check_consumed()
        self.max_value = max_value
        return self

    def with_min_length(self, min_length: int) -> Self:
        self._check_consumed()
        self.min_length = min_length
        return self

    def with_max_length(self, max_length: int) -> Self:
        self._check_consumed()
        self.max_length = max_length
        return self

    def with_autocomplete(self, autocomplete: bool = True) -> Self:
        self._check_consumed()
        self.autocomplete = autocomplete
        return self

    def with_channel_types(self, channel_types: Iterable[ChannelType]) -> Self:
        self._check_consumed()
        self.channel_types.extend(channel_types)
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

    def draft(self) -> CommandOption:
        """unvalidated snapshot of the builder, nested builders included"""
        return CommandOption.model_construct(
            type=self.type,
            name=self.name,
            name_localizations=self.name_localizations,
            description=self.description,
            description_localizations=self.description_localizations,
            required=self.required,
            choices=tuple(
                Choice.model_construct(
                    name=name,
                    value=value,
                    name_localizations=localizations
                )
                for name, value, localizations in self.choices
            ) or None,
            options=tuple(
                option.draft()
                if isinstance(option, CommandOptionBuilder) else
                option
                for option in self.options
            ) or None,
            channel_types=tuple(self.channel_types) or None,
            min_value=self.min_value,
            max_value=self.max_value,
            min_length=self.min_length,
            max_length=self.max_length,
            autocomplete=self.autocomplete
        )

    def build(self, path: str = '') -> CommandOption:
        self._check_consumed()
        option = validate_option(self.draft(), path, self.ordering)
        self._consumed = True
        return option
