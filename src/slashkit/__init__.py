from .version import VERSION, API_VERSION
from .env import Env
from .discord import *  # noqa: F403

__version__ = VERSION
