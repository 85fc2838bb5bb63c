from __future__ import annotations
from slashkit.errors import ConflictingOptions, IncompatibleField, OrderingViolation, LengthViolation, PatternViolation, BuilderConsumed, RangeViolation, LimitExceeded, DuplicateName, MissingField, TypeMismatch
from slashkit.discord.enums import ApplicationCommandOptionType, ChannelType, OptionOrdering
from slashkit.discord.models import CommandOption, CommandOptionBuilder, validate_option
import pytest

OT = ApplicationCommandOptionType


def test_string_option_payload() -> None:
    option = (
        CommandOptionBuilder(OT.STRING, 'name', 'your name')
        .with_required()
        .with_min_length(1)
        .with_max_length(32)
        .build()
    )

    assert option.as_payload() == {
        'type': 3,
        'name': 'name',
        'description': 'your name',
        'required': True,
        'min_length': 1,
        'max_length': 32,
        'autocomplete': False
    }


def test_choices_keep_their_runtime_type() -> None:
    option = (
        CommandOptionBuilder(OT.NUMBER, 'scale', 'how much')
        .with_choice('half', 0.5)
        .with_choices([('double', 2.0)])
        .build()
    )

    assert [choice.value for choice in option.choices] == [0.5, 2.0]
    assert option.as_payload()['choices'] == [
        {'name': 'half', 'value': 0.5},
        {'name': 'double', 'value': 2.0}
    ]


def test_missing_name_and_description() -> None:
    with pytest.raises(MissingField) as e:
        CommandOptionBuilder(OT.STRING).with_description('text').build()

    assert e.value.path == 'name'

    with pytest.raises(MissingField) as e:
        CommandOptionBuilder(OT.STRING, 'text').build()

    assert e.value.path == 'description'


@pytest.mark.parametrize('name', ['Upper', 'has space', 'bad!', 'has\n'])
def test_name_pattern(name: str) -> None:
    with pytest.raises(PatternViolation) as e:
        CommandOptionBuilder(OT.STRING, name, 'text').build()

    assert e.value.path == 'name'


def test_name_accepts_other_scripts() -> None:
    option = CommandOptionBuilder(OT.STRING, 'नाम', 'text').build()

    assert option.name == 'नाम'


def test_name_and_description_length() -> None:
    with pytest.raises(LengthViolation):
        CommandOptionBuilder(OT.STRING, 'a' * 33, 'text').build()

    with pytest.raises(LengthViolation) as e:
        CommandOptionBuilder(OT.STRING, 'text', 'a' * 101).build()

    assert e.value.path == 'description'

    with pytest.raises(LengthViolation):
        CommandOptionBuilder(OT.STRING, 'text', '').build()


@pytest.mark.parametrize('kind', list(OT))
def test_autocomplete_conflicts_with_choices(kind: ApplicationCommandOptionType) -> None:
    value = {OT.INTEGER: 1, OT.NUMBER: 1.0}.get(kind, 'red')
    builder = (
        CommandOptionBuilder(kind, 'color', 'pick one')
        .with_choice('red', value)
        .with_autocomplete()
    )

    with pytest.raises(ConflictingOptions) as e:
        builder.build()

    assert e.value.path == 'autocomplete'


def test_choices_only_for_value_kinds() -> None:
    with pytest.raises(IncompatibleField) as e:
        (
            CommandOptionBuilder(OT.BOOLEAN, 'flag', 'on or off')
            .with_choice('yes', 'yes')
            .build()
        )

    assert e.value.path == 'choices'


@pytest.mark.parametrize('value', ['one', 1.0, True])
def test_integer_choice_type_mismatch(value: object) -> None:
    with pytest.raises(TypeMismatch) as e:
        (
            CommandOptionBuilder(OT.INTEGER, 'count', 'how many')
            .with_choice('one', value)  # type: ignore[arg-type]
            .build()
        )

    assert e.value.path == 'choices[0].value'


def test_choice_limits() -> None:
    builder = CommandOptionBuilder(OT.STRING, 'pick', 'pick one')
    for index in range(26):
        builder.with_choice(f'choice {index}', str(index))

    with pytest.raises(LimitExceeded) as e:
        builder.build()

    assert e.value.path == 'choices'

    with pytest.raises(LengthViolation) as e:
        (
            CommandOptionBuilder(OT.STRING, 'pick', 'pick one')
            .with_choice('long', 'x' * 101)
            .build()
        )

    assert e.value.path == 'choices[0].value'


def test_duplicate_choice_names() -> None:
    with pytest.raises(DuplicateName) as e:
        (
            CommandOptionBuilder(OT.STRING, 'pick', 'pick one')
            .with_choice('same', 'a')
            .with_choice('same', 'b')
            .build()
        )

    assert e.value.path == 'choices[1].name'


def test_autocomplete_only_for_value_kinds() -> None:
    with pytest.raises(IncompatibleField) as e:
        CommandOptionBuilder(OT.USER, 'who', 'a user').with_autocomplete().build()

    assert e.value.path == 'autocomplete'


@pytest.mark.parametrize(
    'kind',
    [kind for kind in OT if kind not in {OT.INTEGER, OT.NUMBER}]
)
@pytest.mark.parametrize('field', ['min_value', 'max_value'])
def test_value_range_only_for_numeric_kinds(
    kind: ApplicationCommandOptionType,
    field: str
) -> None:
    builder = CommandOptionBuilder(kind, 'text', 'text')
    getattr(builder, f'with_{field}')(1)

    with pytest.raises(IncompatibleField) as e:
        builder.build()

    assert e.value.path == field


def test_value_range_rules() -> None:
    with pytest.raises(TypeMismatch):
        CommandOptionBuilder(OT.NUMBER, 'ratio', 'ratio').with_min_value(1).build()

    with pytest.raises(RangeViolation) as e:
        (
            CommandOptionBuilder(OT.INTEGER, 'count', 'count')
            .with_min_value(10)
            .with_max_value(5)
            .build()
        )

    assert e.value.path == 'min_value'

    with pytest.raises(RangeViolation) as e:
        (
            CommandOptionBuilder(OT.INTEGER, 'count', 'count')
            .with_max_value(2 ** 53 + 1)
            .build()
        )

    assert e.value.path == 'max_value'


def test_length_range_rules() -> None:
    with pytest.raises(IncompatibleField):
        CommandOptionBuilder(OT.INTEGER, 'count', 'count').with_min_length(1).build()

    with pytest.raises(RangeViolation) as e:
        CommandOptionBuilder(OT.STRING, 'text', 'text').with_min_length(6001).build()

    assert e.value.path == 'min_length'

    with pytest.raises(RangeViolation) as e:
        CommandOptionBuilder(OT.STRING, 'text', 'text').with_max_length(0).build()

    assert e.value.path == 'max_length'

    with pytest.raises(RangeViolation):
        (
            CommandOptionBuilder(OT.STRING, 'text', 'text')
            .with_min_length(10)
            .with_max_length(5)
            .build()
        )


def test_channel_types_only_for_channels() -> None:
    option = (
        CommandOptionBuilder(OT.CHANNEL, 'where', 'a channel')
        .with_channel_types([ChannelType.GUILD_TEXT])
        .build()
    )

    assert option.as_payload()['channel_types'] == [0]

    with pytest.raises(IncompatibleField) as e:
        (
            CommandOptionBuilder(OT.STRING, 'where', 'a channel')
            .with_channel_types([ChannelType.GUILD_TEXT])
            .build()
        )

    assert e.value.path == 'channel_types'


def test_nested_options_only_for_sub_commands() -> None:
    with pytest.raises(IncompatibleField) as e:
        (
            CommandOptionBuilder(OT.STRING, 'text', 'text')
            .with_option(CommandOptionBuilder(OT.STRING, 'inner', 'inner'))
            .build()
        )

    assert e.value.path == 'options'


def test_nested_structure() -> None:
    with pytest.raises(IncompatibleField) as e:
        (
            CommandOptionBuilder(OT.SUB_COMMAND_GROUP, 'group', 'a group')
            .with_option(CommandOptionBuilder(OT.STRING, 'text', 'text'))
            .build()
        )

    assert e.value.path == 'options[0].type'

    with pytest.raises(IncompatibleField):
        (
            CommandOptionBuilder(OT.SUB_COMMAND, 'sub', 'a sub-command')
            .with_option(CommandOptionBuilder(OT.SUB_COMMAND, 'deeper', 'too deep'))
            .build()
        )


def test_nested_error_path() -> None:
    with pytest.raises(TypeMismatch) as e:
        (
            CommandOptionBuilder(OT.SUB_COMMAND, 'set', 'set a value')
            .with_option(CommandOptionBuilder(OT.STRING, 'key', 'the key'))
            .with_option(
                CommandOptionBuilder(OT.INTEGER, 'value', 'the value')
                .with_choice('one', 'one')  # type: ignore[arg-type]
            )
            .build(path='options[0]')
        )

    assert e.value.path == 'options[0].options[1].choices[0].value'


def test_duplicate_sibling_names() -> None:
    with pytest.raises(DuplicateName) as e:
        (
            CommandOptionBuilder(OT.SUB_COMMAND, 'set', 'set a value')
            .with_option(CommandOptionBuilder(OT.STRING, 'key', 'the key'))
            .with_option(CommandOptionBuilder(OT.STRING, 'key', 'the key again'))
            .build()
        )

    assert e.value.path == 'options[1].name'


def test_required_options_are_moved_first() -> None:
    option = (
        CommandOptionBuilder(OT.SUB_COMMAND, 'set', 'set a value')
        .with_option(CommandOptionBuilder(OT.STRING, 'note', 'a note'))
        .with_option(CommandOptionBuilder(OT.STRING, 'key', 'the key').with_required())
        .with_option(CommandOptionBuilder(OT.STRING, 'extra', 'extra'))
        .with_option(CommandOptionBuilder(OT.STRING, 'value', 'the value').with_required())
        .build()
    )

    assert [nested.name for nested in option.options] == [
        'key', 'value', 'note', 'extra']


def test_strict_ordering() -> None:
    builder = (
        CommandOptionBuilder(OT.SUB_COMMAND, 'set', 'set a value')
        .with_option(CommandOptionBuilder(OT.STRING, 'note', 'a note'))
        .with_option(CommandOptionBuilder(OT.STRING, 'key', 'the key').with_required())
        .with_ordering(OptionOrdering.STRICT)
    )

    with pytest.raises(OrderingViolation) as e:
        builder.build()

    assert e.value.path == 'options[1].required'


def test_builder_is_consumed() -> None:
    builder = CommandOptionBuilder(OT.BOOLEAN, 'flag', 'on or off')
    builder.build()

    with pytest.raises(BuilderConsumed):
        builder.build()

    with pytest.raises(BuilderConsumed):
        builder.with_required()


def test_failed_build_can_be_fixed() -> None:
    builder = CommandOptionBuilder(OT.BOOLEAN, 'Flag', 'on or off')

    with pytest.raises(PatternViolation):
        builder.build()

    assert builder.with_name('flag').build().name == 'flag'


def test_parsed_number_values_become_floats() -> None:
    option = CommandOption.from_payload({
        'type': 10,
        'name': 'ratio',
        'description': 'a ratio',
        'min_value': 0,
        'max_value': 1,
        'choices': [{'name': 'all', 'value': 1}]
    })

    assert option.min_value == 0.0
    assert type(option.min_value) is float
    assert type(option.choices[0].value) is float
    assert validate_option(option) == option
