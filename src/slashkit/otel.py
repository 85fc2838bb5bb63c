from __future__ import annotations
from typing import TYPE_CHECKING
from .version import VERSION
import logfire

if TYPE_CHECKING:
    from .env import Env


__all__ = (
    'configure',
)


def configure(env: Env) -> None:
    """configure logfire for slashkit, nothing leaves the process without a token"""
    if not env.logfire_token:
        logfire.configure(
            service_name='slashkit',
            service_version=VERSION,
            send_to_logfire=False,
            console=False
        )
        return

    logfire.configure(
        service_name='slashkit' + ('-dev' if env.dev else ''),
        service_version=VERSION,
        token=env.logfire_token,
        environment='development' if env.dev else 'production',
        scrubbing=False if env.dev else None,
        console=False
    )
    logfire.instrument_aiohttp_client()
