from __future__ import annotations
from slashkit.discord.enums import InteractionType, InteractionCallbackType, InteractionContextType, Permission
from .data import CommandDataOption, ComponentData, CommandData, OptionValue, ModalData, Resolved
from slashkit.discord.models.response import ResponseBuilder, response_kind
from slashkit.discord.models.base import PayloadModel, load_payload
from slashkit.errors import MalformedPayload, WrongVariant
from slashkit.discord.models.user import User, Member
from slashkit.discord.types import Snowflake
from pydantic import model_validator
from typing import Any, ClassVar


__all__ = (
    'ApplicationCommandInteraction',
    'AutocompleteInteraction',
    'BaseInteraction',
    'CommandData',
    'CommandDataOption',
    'ComponentData',
    'Interaction',
    'MessageComponentInteraction',
    'ModalData',
    'ModalSubmitInteraction',
    'OptionValue',
    'PingInteraction',
    'Resolved',
    'UnknownInteraction',
    'parse_interaction',
)


_MESSAGE_RESPONSES = frozenset({
    InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
    InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
})

_UPDATE_RESPONSES = frozenset({
    InteractionCallbackType.DEFERRED_UPDATE_MESSAGE,
    InteractionCallbackType.UPDATE_MESSAGE,
})


class BaseInteraction(PayloadModel):
    allowed_responses: ClassVar[frozenset[InteractionCallbackType]] = frozenset()
    default_response: ClassVar[InteractionCallbackType | None] = None

    id: Snowflake
    application_id: Snowflake
    token: str
    """continuation token for responding to the interaction"""
    version: int = 1
    guild_id: Snowflake | None = None
    channel_id: Snowflake | None = None
    member: Member | None = None
    """guild member data for the invoking user, including permissions"""
    user: User | None = None
    """user object for the invoking user, if invoked in a DM"""
    locale: str | None = None
    guild_locale: str | None = None
    app_permissions: Permission | None = None
    context: InteractionContextType | None = None

    @property
    def author(self) -> Member | User | None:
        return self.member if self.user is None else self.user

    @property
    def author_id(self) -> Snowflake | None:
        match self.author:
            case User() as user:
                return user.id
            case Member(user=User() as user):
                return user.id

        return None

    @property
    def command_data(self) -> CommandData:
        raise WrongVariant(
            f'{type(self).__name__} does not carry application command data')

    @property
    def component_data(self) -> ComponentData:
        raise WrongVariant(
            f'{type(self).__name__} does not carry message component data')

    @property
    def modal_data(self) -> ModalData:
        raise WrongVariant(
            f'{type(self).__name__} does not carry modal submit data')

    def response(
        self,
        kind: InteractionCallbackType | None = None
    ) -> ResponseBuilder:
        """start a response builder limited to kinds valid for this interaction

        without a `kind`, the default for the interaction is chosen if it has
        one, otherwise the builder is returned without a kind
        """
        kind = (
            response_kind(kind)
            if kind is not None else
            self.default_response
        )

        if kind is not None and kind not in self.allowed_responses:
            raise WrongVariant(
                f'{kind.name} is not a valid response to {type(self).__name__}')

        return ResponseBuilder(kind, allowed=self.allowed_responses)


class PingInteraction(BaseInteraction):
    allowed_responses = frozenset({InteractionCallbackType.PONG})
    default_response = InteractionCallbackType.PONG

    type: InteractionType = InteractionType.PING


class ApplicationCommandInteraction(BaseInteraction):
    allowed_responses = _MESSAGE_RESPONSES | {InteractionCallbackType.MODAL}

    type: InteractionType = InteractionType.APPLICATION_COMMAND
    data: CommandData

    @property
    def command_data(self) -> CommandData:
        return self.data


class MessageComponentInteraction(BaseInteraction):
    allowed_responses = (
        _MESSAGE_RESPONSES |
        _UPDATE_RESPONSES |
        {InteractionCallbackType.MODAL}
    )

    type: InteractionType = InteractionType.MESSAGE_COMPONENT
    data: ComponentData
    message: dict[str, Any] | None = None
    """message the component was attached to"""

    @property
    def component_data(self) -> ComponentData:
        return self.data


class AutocompleteInteraction(BaseInteraction):
    allowed_responses = frozenset({
        InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT})
    default_response = InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT

    type: InteractionType = InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE
    data: CommandData

    @property
    def command_data(self) -> CommandData:
        return self.data


class ModalSubmitInteraction(BaseInteraction):
    allowed_responses = _MESSAGE_RESPONSES | _UPDATE_RESPONSES

    type: InteractionType = InteractionType.MODAL_SUBMIT
    data: ModalData
    message: dict[str, Any] | None = None
    """present when the modal was opened from a component"""

    @property
    def modal_data(self) -> ModalData:
        return self.data


class UnknownInteraction(BaseInteraction):
    """an interaction type this library does not model, kept as sent

    there is no response kind known to be valid for it
    """

    type: int
    raw: dict[str, Any]

    @model_validator(mode='before')
    @classmethod
    def _keep_raw(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, dict) and 'raw' not in data:
            return {**data, 'raw': data}

        return data

    def as_payload(self) -> dict:
        return self.raw


type Interaction = (
    PingInteraction |
    ApplicationCommandInteraction |
    MessageComponentInteraction |
    AutocompleteInteraction |
    ModalSubmitInteraction |
    UnknownInteraction
)


_INTERACTION_TYPES: dict[InteractionType, type[BaseInteraction]] = {
    InteractionType.PING: PingInteraction,
    InteractionType.APPLICATION_COMMAND: ApplicationCommandInteraction,
    InteractionType.MESSAGE_COMPONENT: MessageComponentInteraction,
    InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE: AutocompleteInteraction,
    InteractionType.MODAL_SUBMIT: ModalSubmitInteraction,
}


def parse_interaction(payload: dict | str | bytes) -> Interaction:
    """parse an inbound interaction into its variant

    unknown interaction types become `UnknownInteraction`, anything that
    is not a json object with an integer `type` raises `MalformedPayload`
    """
    data = load_payload(payload)
    interaction_type = data.get('type')

    if type(interaction_type) is not int:
        raise MalformedPayload(
            f'interaction type must be an integer, got {interaction_type!r}')

    try:
        interaction_class = _INTERACTION_TYPES[InteractionType(interaction_type)]
    except ValueError:
        interaction_class = UnknownInteraction

    return interaction_class.from_payload(data)  # type: ignore[return-value]
