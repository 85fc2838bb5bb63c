from .register import CommandRegistrar, command_diff, serialize_commands, validate_command_set
from .http import BASE_URL, Route, request, application_id_from_token
from .verify import verify_interaction, verify_signature
from .types import Snowflake
from .enums import *  # noqa: F403
from .models import *  # noqa: F403
from . import enums, models

__all__ = (
    'BASE_URL',
    'CommandRegistrar',
    'Route',
    'Snowflake',
    'application_id_from_token',
    'command_diff',
    'request',
    'serialize_commands',
    'validate_command_set',
    'verify_interaction',
    'verify_signature',
    *enums.__all__,
    *models.__all__,
)
