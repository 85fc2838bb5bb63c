from .version import API_VERSION
from pydantic import BaseModel
from typing import Self
from os import environ


__all__ = (
    'Env',
)


class Env(BaseModel):
    bot_token: str
    application_id_override: int | None = None
    discord_url: str = f'https://discord.com/api/v{API_VERSION}'
    public_key: str | None = None
    """hex ed25519 key used to verify inbound interactions"""
    logfire_token: str | None = None
    dev: bool = True

    @classmethod
    def new(cls) -> Self:
        # ? only called by callers at the edge, models and builders never read the environment
        return cls.model_validate({
            'bot_token': environ.get('BOT_TOKEN'),
            'application_id_override': environ.get('APPLICATION_ID') or None,
            'discord_url': environ.get(
                'DISCORD_URL',
                f'https://discord.com/api/v{API_VERSION}'),
            'public_key': environ.get('PUBLIC_KEY') or None,
            'logfire_token': environ.get('LOGFIRE_TOKEN') or None,
            'dev': environ.get('DEV', '1') != '0',
        })

    @property
    def application_id(self) -> int:
        if self.application_id_override is not None:
            return self.application_id_override

        from .discord.http import application_id_from_token
        return application_id_from_token(self.bot_token)
