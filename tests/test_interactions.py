from __future__ import annotations
from slashkit.discord.models import ApplicationCommandInteraction, MessageComponentInteraction, ModalSubmitInteraction, AutocompleteInteraction, UnknownInteraction, UnknownComponent, PingInteraction, ResponseBuilderState, PongResponse, Member, parse_interaction
from slashkit.discord.enums import ComponentType, InteractionCallbackType, InteractionType, Permission
from slashkit.errors import IncompatibleField, MalformedPayload, WrongVariant
from conftest import interaction_payload
from orjson import dumps
import pytest


def _command_payload() -> dict:
    return interaction_payload(
        2,
        data={
            'id': '1000000000000000001',
            'name': 'config',
            'type': 1,
            'options': [{
                'name': 'proxy',
                'type': 2,
                'options': [{
                    'name': 'set',
                    'type': 1,
                    'options': [
                        {'name': 'prefix', 'type': 3, 'value': 'k:'},
                        {'name': 'enabled', 'type': 5, 'value': True},
                        {'name': 'limit', 'type': 4, 'value': 5}
                    ]
                }]
            }]
        }
    )


def test_ping() -> None:
    interaction = parse_interaction({
        'id': '1', 'application_id': '2', 'type': 1, 'token': 't', 'version': 1})

    assert isinstance(interaction, PingInteraction)
    assert interaction.type == InteractionType.PING


def test_ping_always_pongs() -> None:
    interaction = parse_interaction({
        'id': '1', 'application_id': '2', 'type': 1, 'token': 't', 'version': 1})

    builder = interaction.response()

    assert builder.kind == InteractionCallbackType.PONG
    assert builder.state == ResponseBuilderState.KIND_CHOSEN

    with pytest.raises(IncompatibleField):
        builder.with_content('hello')

    response = builder.build()

    assert isinstance(response, PongResponse)
    assert response.as_payload() == {'type': 1}

    with pytest.raises(WrongVariant):
        interaction.response(InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE)

    with pytest.raises(WrongVariant):
        interaction.response(12)  # type: ignore[arg-type]


def test_application_command() -> None:
    interaction = parse_interaction(dumps(_command_payload()))

    assert isinstance(interaction, ApplicationCommandInteraction)
    assert interaction.id == 1300000000000000001
    assert isinstance(interaction.author, Member)
    assert interaction.author_id == 1100000000000000001
    assert interaction.app_permissions == Permission.SEND_MESSAGES

    data = interaction.command_data

    assert data.command_path() == ('config', 'proxy', 'set')
    assert data.option_values() == {'prefix': 'k:', 'enabled': True, 'limit': 5}
    assert type(data.option_values()['limit']) is int
    assert data.option('proxy') is not None
    assert data.option('missing') is None
    assert data.focused_option() is None


def test_wrong_variant_accessors() -> None:
    interaction = parse_interaction(_command_payload())

    with pytest.raises(WrongVariant):
        interaction.component_data

    with pytest.raises(WrongVariant):
        interaction.modal_data


def test_autocomplete_focused_option() -> None:
    interaction = parse_interaction(interaction_payload(
        4,
        data={
            'id': '1000000000000000001',
            'name': 'color',
            'type': 1,
            'options': [
                {'name': 'shade', 'type': 3, 'value': 'da', 'focused': True},
                {'name': 'alpha', 'type': 10, 'value': 0.5}
            ]
        }
    ))

    assert isinstance(interaction, AutocompleteInteraction)
    assert interaction.command_data.focused_option().name == 'shade'

    builder = interaction.response()

    assert builder.kind == InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT

    with pytest.raises(WrongVariant):
        interaction.response(InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE)


def test_message_component() -> None:
    interaction = parse_interaction(interaction_payload(
        3,
        data={
            'custom_id': 'pick',
            'component_type': 3,
            'values': ['a', 'b']
        },
        message={'id': '5', 'content': 'pick one'}
    ))

    assert isinstance(interaction, MessageComponentInteraction)
    assert interaction.component_data.component_type == ComponentType.STRING_SELECT
    assert interaction.component_data.values == ('a', 'b')

    with pytest.raises(WrongVariant):
        interaction.command_data

    builder = interaction.response(InteractionCallbackType.UPDATE_MESSAGE)

    assert builder.kind == InteractionCallbackType.UPDATE_MESSAGE


def test_unknown_component_type_is_kept() -> None:
    interaction = parse_interaction(interaction_payload(
        3,
        data={'custom_id': 'new', 'component_type': 99}
    ))

    assert interaction.component_data.component_type == 99


def test_modal_submit() -> None:
    interaction = parse_interaction(interaction_payload(
        5,
        user={'id': '1100000000000000002', 'username': 'dm-user'},
        member=None,
        data={
            'custom_id': 'feedback',
            'components': [
                {'type': 1, 'components': [
                    {'type': 4, 'custom_id': 'title', 'value': 'hello'}]},
                {'type': 1, 'components': [
                    {'type': 4, 'custom_id': 'body', 'value': 'world'}]},
                {'type': 1, 'components': [
                    {'type': 42, 'custom_id': 'future'}]}
            ]
        }
    ))

    assert isinstance(interaction, ModalSubmitInteraction)
    assert interaction.author_id == 1100000000000000002
    assert interaction.modal_data.values() == {'title': 'hello', 'body': 'world'}
    assert isinstance(
        interaction.modal_data.components[2].components[0], UnknownComponent)

    with pytest.raises(WrongVariant):
        interaction.response(InteractionCallbackType.MODAL)


def test_unknown_interaction_type() -> None:
    payload = interaction_payload(42, data={'something': 'new'})
    interaction = parse_interaction(payload)

    assert isinstance(interaction, UnknownInteraction)
    assert interaction.type == 42
    assert interaction.raw == payload

    with pytest.raises(WrongVariant):
        interaction.command_data

    with pytest.raises(WrongVariant):
        interaction.response().with_kind(
            InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE)


@pytest.mark.parametrize('payload', [
    b'{not json',
    b'[1, 2, 3]',
    {'id': '1', 'application_id': '2', 'token': 't'},
    {'id': '1', 'application_id': '2', 'token': 't', 'type': 'two'},
    interaction_payload(2, data={'name': 'missing id'}),
    interaction_payload(3, data=[]),
])
def test_malformed_payloads(payload: dict | bytes) -> None:
    with pytest.raises(MalformedPayload):
        parse_interaction(payload)
