from __future__ import annotations
from slashkit.discord.enums import Permission
from datetime import datetime  # noqa: TC003
from slashkit.discord.types import Snowflake
from .base import PayloadModel


__all__ = (
    'Member',
    'User',
)


class User(PayloadModel):
    id: Snowflake
    username: str
    discriminator: str = '0'
    global_name: str | None = None
    avatar: str | None = None
    bot: bool | None = None
    system: bool | None = None
    locale: str | None = None
    public_flags: int | None = None

    @property
    def mention(self) -> str:
        return f'<@{self.id}>'

    @property
    def display_name(self) -> str:
        return self.global_name or self.username


class Member(PayloadModel):
    """guild member, `user` is always present in interaction payloads"""
    user: User | None = None
    nick: str | None = None
    avatar: str | None = None
    roles: tuple[Snowflake, ...] = ()
    joined_at: datetime | None = None
    premium_since: datetime | None = None
    deaf: bool | None = None
    mute: bool | None = None
    flags: int | None = None
    pending: bool | None = None
    permissions: Permission | None = None
    """total permissions of the member in the channel, including overwrites"""
    communication_disabled_until: datetime | None = None

    @property
    def display_name(self) -> str | None:
        if self.nick is not None:
            return self.nick

        return self.user.display_name if self.user is not None else None
