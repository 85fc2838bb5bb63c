from __future__ import annotations
from base64 import b64encode
import logfire
import pytest


APPLICATION_ID = 123456789012345678


def make_token(application_id: int = APPLICATION_ID) -> str:
    encoded = b64encode(str(application_id).encode()).decode().rstrip('=')
    return f'{encoded}.GhIjKl.{"a" * 38}'


def pytest_configure() -> None:
    logfire.configure(
        service_name='slashkit-tests',
        send_to_logfire=False,
        console=False
    )


@pytest.fixture
def anyio_backend() -> str:
    return 'asyncio'


@pytest.fixture
def token() -> str:
    return make_token()


def interaction_payload(type: int, **fields) -> dict:  # noqa: ANN003
    return {
        'id': '1300000000000000001',
        'application_id': str(APPLICATION_ID),
        'type': type,
        'token': 'interaction-token',
        'version': 1,
        'guild_id': '1200000000000000001',
        'channel_id': '1200000000000000002',
        'member': {
            'user': {
                'id': '1100000000000000001',
                'username': 'tyrant',
                'discriminator': '0',
                'global_name': 'Tyrant'
            },
            'roles': [],
            'permissions': '2147483647',
            'joined_at': '2024-01-01T00:00:00+00:00'
        },
        'locale': 'en-US',
        'app_permissions': '2048',
        'context': 0,
        **fields
    }
