from __future__ import annotations
from slashkit.errors import IncompatibleField, BuilderConsumed, MalformedPayload, LengthViolation, LimitExceeded, MissingField, TypeMismatch, WrongVariant
from .checks import CHOICE_NAME_LENGTH, CHOICE_VALUE_MAX_LENGTH, MAX_CHOICES, check_count, check_length
from slashkit.discord.enums import InteractionCallbackType, MessageFlag
from pydantic import ValidationError as PydanticValidationError
from typing import TYPE_CHECKING, Any, ClassVar, Self
from .base import PayloadModel, load_payload
from .component import ActionRow, TextInput
from .choice import Choice, ChoiceValue
from .embed import Embed  # noqa: TC001
from enum import Enum

if TYPE_CHECKING:
    from collections.abc import Iterable
    from .component import Component


__all__ = (
    'AutocompleteResponse',
    'DeferredMessageResponse',
    'DeferredUpdateResponse',
    'InteractionResponse',
    'MessageResponse',
    'ModalResponse',
    'PongResponse',
    'ResponseBuilder',
    'ResponseBuilderState',
    'UpdateMessageResponse',
    'parse_response',
    'response_kind',
)


MAX_CONTENT_LENGTH = 2000
MAX_EMBEDS = 10
MAX_COMPONENT_ROWS = 5
MODAL_CUSTOM_ID_LENGTH = (1, 100)
MODAL_TITLE_LENGTH = (1, 45)


class InteractionResponse(PayloadModel):
    kind: ClassVar[InteractionCallbackType]

    @property
    def type(self) -> InteractionCallbackType:
        return self.kind

    def as_payload(self) -> dict:
        payload: dict[str, Any] = {'type': self.kind.value}

        if self.kind not in {
            InteractionCallbackType.PONG,
            InteractionCallbackType.DEFERRED_UPDATE_MESSAGE
        }:
            payload['data'] = self.model_dump(mode='json', exclude_none=True)

        return payload


class PongResponse(InteractionResponse):
    kind = InteractionCallbackType.PONG


class MessageResponse(InteractionResponse):
    kind = InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE
    content: str | None = None
    tts: bool | None = None
    embeds: tuple[Embed, ...] | None = None
    flags: MessageFlag | None = None
    components: tuple[ActionRow, ...] | None = None


class DeferredMessageResponse(InteractionResponse):
    kind = InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE
    flags: MessageFlag | None = None
    """only EPHEMERAL is honored, it decides the visibility of the follow-up"""


class DeferredUpdateResponse(InteractionResponse):
    kind = InteractionCallbackType.DEFERRED_UPDATE_MESSAGE


class UpdateMessageResponse(InteractionResponse):
    kind = InteractionCallbackType.UPDATE_MESSAGE
    content: str | None = None
    embeds: tuple[Embed, ...] | None = None
    flags: MessageFlag | None = None
    components: tuple[ActionRow, ...] | None = None


class AutocompleteResponse(InteractionResponse):
    kind = InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT
    choices: tuple[Choice, ...] = ()


class ModalResponse(InteractionResponse):
    kind = InteractionCallbackType.MODAL
    custom_id: str
    title: str
    components: tuple[ActionRow, ...]


_RESPONSE_TYPES: dict[InteractionCallbackType, type[InteractionResponse]] = {
    response_type.kind: response_type
    for response_type in (
        PongResponse,
        MessageResponse,
        DeferredMessageResponse,
        DeferredUpdateResponse,
        UpdateMessageResponse,
        AutocompleteResponse,
        ModalResponse,
    )
}


def response_kind(kind: InteractionCallbackType | int) -> InteractionCallbackType:
    try:
        return InteractionCallbackType(kind)
    except ValueError as e:
        raise WrongVariant(f'{kind!r} is not a known response kind') from e


def parse_response(payload: dict | str | bytes) -> InteractionResponse:
    """parse `{"type": n, "data": {...}}` back into its response class"""
    data = load_payload(payload)

    try:
        kind = InteractionCallbackType(data.get('type'))
    except ValueError as e:
        raise MalformedPayload(
            f'unknown response type {data.get('type')!r}') from e

    response_type = _RESPONSE_TYPES[kind]

    try:
        return response_type.model_validate(data.get('data') or {})
    except PydanticValidationError as e:
        raise MalformedPayload(
            f'invalid {response_type.__name__} payload: {e}') from e


class ResponseBuilderState(Enum):
    UNSTARTED = 0
    """no response kind chosen yet, field setters are rejected"""
    KIND_CHOSEN = 1
    FIELDS_ACCUMULATING = 2
    BUILT = 3
    """terminal, every further call raises `BuilderConsumed`"""


class ResponseBuilder:
    """kind-gated builder for an interaction response

    a field setter only succeeds when the field is legal for the chosen kind,
    so a built response can never carry a field its kind does not allow
    """

    LEGAL_FIELDS: ClassVar[dict[InteractionCallbackType, frozenset[str]]] = {
        InteractionCallbackType.PONG: frozenset(),
        InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE: frozenset({
            'content', 'tts', 'embeds', 'flags', 'components'}),
        InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE: frozenset({
            'flags'}),
        InteractionCallbackType.DEFERRED_UPDATE_MESSAGE: frozenset(),
        InteractionCallbackType.UPDATE_MESSAGE: frozenset({
            'content', 'embeds', 'flags', 'components'}),
        InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT: frozenset({
            'choices'}),
        InteractionCallbackType.MODAL: frozenset({
            'custom_id', 'title', 'components'}),
    }

    def __init__(
        self,
        kind: InteractionCallbackType | None = None,
        *,
        allowed: frozenset[InteractionCallbackType] | None = None
    ) -> None:
        self.state = ResponseBuilderState.UNSTARTED
        self.kind: InteractionCallbackType | None = None
        self.allowed = allowed
        """kinds valid for the interaction being answered, `None` for any"""
        self._fields: dict[str, Any] = {}

        if kind is not None:
            self.with_kind(kind)

    def with_kind(self, kind: InteractionCallbackType) -> Self:
        if self.state == ResponseBuilderState.BUILT:
            raise BuilderConsumed('response builder has already been built')

        if self.state != ResponseBuilderState.UNSTARTED:
            raise IncompatibleField(
                'type', f'response kind is already {self.kind.name}')  # type: ignore[union-attr]

        kind = response_kind(kind)

        if self.allowed is not None and kind not in self.allowed:
            raise WrongVariant(
                f'{kind.name} is not a valid response to this interaction')

        self.kind = kind
        self.state = ResponseBuilderState.KIND_CHOSEN
        return self

    def _check_field(self, field: str) -> None:
        if self.state == ResponseBuilderState.BUILT:
            raise BuilderConsumed('response builder has already been built')

        if self.kind is None:
            raise MissingField(
                'type', 'a response kind must be chosen before setting fields')

        if field not in self.LEGAL_FIELDS[self.kind]:
            raise IncompatibleField(
                field, f'{field} is not valid for {self.kind.name} responses')

        self.state = ResponseBuilderState.FIELDS_ACCUMULATING

    def _set(self, field: str, value: Any) -> Self:  # noqa: ANN401
        self._check_field(field)
        self._fields[field] = value
        return self

    def _extend(self, field: str, values: Iterable[Any]) -> Self:
        self._check_field(field)
        self._fields.setdefault(field, []).extend(values)
        return self

    def with_content(self, content: str) -> Self:
        return self._set('content', content)

    def with_tts(self, tts: bool = True) -> Self:
        return self._set('tts', tts)

    def with_embed(self, embed: Embed) -> Self:
        return self._extend('embeds', [embed])

    def with_embeds(self, embeds: Iterable[Embed]) -> Self:
        return self._extend('embeds', embeds)

    def with_flags(self, flags: MessageFlag) -> Self:
        return self._set('flags', flags)

    def with_ephemeral(self, ephemeral: bool = True) -> Self:
        self._check_field('flags')
        flags = self._fields.get('flags', MessageFlag.NONE)

        self._fields['flags'] = (
            flags | MessageFlag.EPHEMERAL
            if ephemeral else
            flags & ~MessageFlag.EPHEMERAL
        )
        return self

    def with_component(self, component: ActionRow | Component) -> Self:
        """add a row, a bare component is wrapped in a row of its own"""
        return self._extend('components', [
            component
            if isinstance(component, ActionRow) else
            ActionRow(components=(component,))
        ])

    def with_components(self, components: Iterable[ActionRow | Component]) -> Self:
        for component in components:
            self.with_component(component)

        return self

    def with_choice(
        self,
        name: str,
        value: ChoiceValue,
        name_localizations: dict[str, str] | None = None
    ) -> Self:
        return self._extend('choices', [(name, value, name_localizations)])

    def with_choices(
        self,
        choices: Iterable[Choice | tuple[str, ChoiceValue]]
    ) -> Self:
        self._check_field('choices')
        for choice in choices:
            if isinstance(choice, Choice):
                self.with_choice(
                    choice.name, choice.value, choice.name_localizations)
                continue

            self.with_choice(*choice)

        return self

    def with_custom_id(self, custom_id: str) -> Self:
        return self._set('custom_id', custom_id)

    def with_title(self, title: str) -> Self:
        return self._set('title', title)

    def _check_message(self) -> None:
        content = self._fields.get('content')
        embeds = self._fields.get('embeds', [])
        components = self._fields.get('components', [])

        if content is not None and len(content) > MAX_CONTENT_LENGTH:
            raise LengthViolation(
                'content',
                f'must be at most {MAX_CONTENT_LENGTH} characters, got {len(content)}'
            )

        check_count('embeds', embeds, MAX_EMBEDS)
        check_count('components', components, MAX_COMPONENT_ROWS)

        if not (content or embeds or components):
            raise MissingField(
                'content', 'one of content, embeds, or components is required')

    def _check_choices(self) -> None:
        choices = self._fields.get('choices', [])
        check_count('choices', choices, MAX_CHOICES)

        for index, (name, value, _) in enumerate(choices):
            check_length(f'choices[{index}].name', name, CHOICE_NAME_LENGTH)

            if type(value) not in {str, int, float}:
                raise TypeMismatch(
                    f'choices[{index}].value',
                    f'expected str, int, or float, got {type(value).__name__}'
                )

            if isinstance(value, str) and len(value) > CHOICE_VALUE_MAX_LENGTH:
                raise LengthViolation(
                    f'choices[{index}].value',
                    f'must be at most {CHOICE_VALUE_MAX_LENGTH} characters, got {len(value)}'
                )

    def _check_modal(self) -> None:
        for field, bounds in (
            ('custom_id', MODAL_CUSTOM_ID_LENGTH),
            ('title', MODAL_TITLE_LENGTH)
        ):
            if self._fields.get(field) is None:
                raise MissingField(field, f'modals require a {field}')

            check_length(field, self._fields[field], bounds)

        rows: list[ActionRow] = self._fields.get('components', [])

        if not rows:
            raise MissingField(
                'components', 'modals require at least one text input')

        check_count('components', rows, MAX_COMPONENT_ROWS)

        for index, row in enumerate(rows):
            if (
                len(row.components) != 1 or
                not isinstance(row.components[0], TextInput)
            ):
                raise IncompatibleField(
                    f'components[{index}]',
                    'each modal row must hold exactly one text input'
                )

            text_input = row.components[0]
            for field in ('style', 'label'):
                if getattr(text_input, field) is None:
                    raise MissingField(
                        f'components[{index}].components[0].{field}',
                        f'text inputs sent in a modal require a {field}'
                    )

    def build(self) -> InteractionResponse:
        if self.state == ResponseBuilderState.BUILT:
            raise BuilderConsumed('response builder has already been built')

        if self.kind is None:
            raise MissingField('type', 'a response kind is required')

        match self.kind:
            case (
                InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE |
                InteractionCallbackType.UPDATE_MESSAGE
            ):
                self._check_message()
            case InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT:
                self._check_choices()
            case InteractionCallbackType.MODAL:
                self._check_modal()

        response_type = _RESPONSE_TYPES[self.kind]
        fields = {
            field: tuple(value) if isinstance(value, list) else value
            for field, value in self._fields.items()
        }

        if 'choices' in fields:
            fields['choices'] = tuple(
                Choice(name=name, value=value)
                if localizations is None else
                Choice(name=name, value=value, name_localizations=localizations)
                for name, value, localizations in fields['choices']
            )

        try:
            response = response_type.model_validate(fields)
        except PydanticValidationError as e:
            error = e.errors()[0]
            raise TypeMismatch(
                '.'.join(str(part) for part in error['loc']) or 'type',
                error['msg']
            ) from e

        self.state = ResponseBuilderState.BUILT
        return response
