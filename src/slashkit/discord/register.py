from __future__ import annotations
from slashkit.errors import MalformedPayload, RemoteRejection, ValidationError, LimitExceeded, ServerError, DuplicateName
from slashkit.discord.enums import ApplicationCommandType, OptionOrdering
from .http import BASE_URL, Route, request, application_id_from_token
from slashkit.discord.models.command import Command, validate_command
from typing import TYPE_CHECKING, Self
from aiohttp import ClientSession
import logfire

if TYPE_CHECKING:
    from collections.abc import Sequence
    from slashkit.env import Env
    from types import TracebackType


__all__ = (
    'COMMAND_LIMITS',
    'CommandRegistrar',
    'command_diff',
    'serialize_commands',
    'validate_command_set',
)


COMMAND_LIMITS = {
    ApplicationCommandType.CHAT_INPUT: 100,
    ApplicationCommandType.USER: 15,
    ApplicationCommandType.MESSAGE: 15,
}


def validate_command_set(
    commands: Sequence[Command],
    ordering: OptionOrdering = OptionOrdering.REORDER
) -> list[Command]:
    """validate every command and the set as a whole

    error paths are prefixed with the command index, e.g.
    `commands[2].options[0].name`
    """
    validated: list[Command] = []
    seen: dict[tuple[ApplicationCommandType, str], int] = {}

    for index, command in enumerate(commands):
        try:
            command = validate_command(command, ordering)
        except ValidationError as e:
            raise type(e)(f'commands[{index}].{e.path}', e.message) from e

        key = (command.type, command.name)
        if key in seen:
            raise DuplicateName(
                f'commands[{index}].name',
                f'{command.type.name} command `{command.name}` is already defined at commands[{seen[key]}]'
            )

        seen[key] = index
        validated.append(command)

    for command_type, limit in COMMAND_LIMITS.items():
        count = sum(command.type == command_type for command in validated)

        if count > limit:
            raise LimitExceeded(
                'commands',
                f'at most {limit} {command_type.name} commands allowed, got {count}'
            )

    return validated


def serialize_commands(
    commands: Sequence[Command],
    ordering: OptionOrdering = OptionOrdering.REORDER
) -> list[dict]:
    return [
        command.as_registration_payload()
        for command in validate_command_set(commands, ordering)
    ]


def _patch_reason(local_command: Command, live_command: Command) -> list[str]:
    reasons = []

    if local_command.description != live_command.description:
        reasons.append('description')

    local_options = local_command.options or ()
    live_options = live_command.options or ()

    if len(local_options) != len(live_options):
        reasons.append(
            f'options ({len(local_options)} local, {len(live_options)} live)')
    else:
        reasons.extend(
            f'options[{index}] ({local_option.name})'
            for index, (local_option, live_option) in enumerate(
                zip(local_options, live_options, strict=True))
            if local_option.as_payload() != live_option.as_payload()
        )

    if local_command.default_member_permissions != live_command.default_member_permissions:
        reasons.append('default_member_permissions')

    if bool(local_command.nsfw) != bool(live_command.nsfw):
        reasons.append('nsfw')

    # ? discord fills these in when they are not sent
    for field in ('contexts', 'integration_types'):
        local_value = getattr(local_command, field)

        if local_value is None:
            continue

        if set(local_value) != set(getattr(live_command, field) or ()):
            reasons.append(field)

    for field in ('name_localizations', 'description_localizations'):
        if (getattr(local_command, field) or {}) != (getattr(live_command, field) or {}):
            reasons.append(field)

    return reasons


def command_diff(
    local: Sequence[Command],
    live: Sequence[Command]
) -> list[str]:
    """reasons the live command set differs from the local one, empty when in sync"""
    live_commands = {
        (command.type, command.name): command
        for command in live
    }
    reasons: list[str] = []

    for command in local:
        live_command = live_commands.pop((command.type, command.name), None)

        if live_command is None:
            reasons.append(f'{command.type}{command.name} is not registered')
            continue

        patch_reasons = _patch_reason(command, live_command)

        if patch_reasons:
            reasons.append(
                f'{command.type}{command.name} changed ({', '.join(patch_reasons)})')

    reasons.extend(
        f'{command.type}{command.name} is registered but not defined locally'
        for command in live_commands.values()
    )

    return reasons


class CommandRegistrar:
    """registers application commands with one bulk overwrite

    a session passed in stays owned by the caller, otherwise the registrar
    opens one on first use and closes it on exit
    """

    def __init__(
        self,
        application_id: int | None,
        token: str,
        *,
        session: ClientSession | None = None,
        base_url: str = BASE_URL
    ) -> None:
        self.application_id = (
            application_id
            if application_id is not None else
            application_id_from_token(token)
        )
        self.token = token
        self.base_url = base_url
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_env(cls, env: Env, *, session: ClientSession | None = None) -> Self:
        return cls(
            env.application_id,
            env.bot_token,
            session=session,
            base_url=env.discord_url
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            self._session = ClientSession()

        return self._session

    def _route(self, method: str, guild_id: int | None) -> Route:
        if guild_id is None:
            return Route(
                method,
                '/applications/{application_id}/commands',
                base_url=self.base_url,
                application_id=self.application_id
            )

        return Route(
            method,
            '/applications/{application_id}/guilds/{guild_id}/commands',
            base_url=self.base_url,
            application_id=self.application_id,
            guild_id=guild_id
        )

    @staticmethod
    def _parse_commands(data: object) -> list[Command]:
        if not isinstance(data, list):
            raise MalformedPayload(
                f'expected a list of commands, got {type(data).__name__}')

        return [Command.from_payload(command) for command in data]

    async def fetch_commands(self, *, guild_id: int | None = None) -> list[Command]:
        return self._parse_commands(await request(
            self.session,
            self._route('GET', guild_id),
            token=self.token
        ))

    async def bulk_overwrite(
        self,
        commands: Sequence[Command],
        *,
        guild_id: int | None = None,
        ordering: OptionOrdering = OptionOrdering.REORDER
    ) -> list[Command]:
        """replace every registered command in scope with `commands`

        the set is validated before anything is sent, exactly one request is
        made and its failure is raised as is
        """
        payload = serialize_commands(commands, ordering)

        with logfire.span(
            'bulk_overwrite {count} commands for {application_id}',
            count=len(payload),
            application_id=self.application_id,
            guild_id=guild_id
        ):
            try:
                data = await request(
                    self.session,
                    self._route('PUT', guild_id),
                    token=self.token,
                    json=payload
                )
            except ServerError as e:
                logfire.warn(
                    'discord failed to register {count} commands: {detail}',
                    count=len(payload),
                    detail=e.detail,
                    status_code=e.status_code
                )
                raise
            except RemoteRejection as e:
                logfire.warn(
                    'discord rejected {count} locally valid commands: {detail}',
                    count=len(payload),
                    detail=e.detail,
                    status_code=e.status_code
                )
                raise

        return self._parse_commands(data)

    async def sync(
        self,
        commands: Sequence[Command],
        *,
        guild_id: int | None = None,
        ordering: OptionOrdering = OptionOrdering.REORDER
    ) -> list[Command]:
        """bulk overwrite only when the live commands differ from `commands`"""
        validated = validate_command_set(commands, ordering)

        with logfire.span(
            'sync_commands with {application_id}',
            application_id=self.application_id,
            guild_id=guild_id
        ):
            live = await self.fetch_commands(guild_id=guild_id)
            reasons = command_diff(validated, live)

            if not reasons:
                logfire.debug('commands are up to date')
                return live

            logfire.debug(
                'registering all commands ({reasons})',
                reasons=', '.join(reasons)
            )

            return await self.bulk_overwrite(
                validated, guild_id=guild_id, ordering=ordering)
