__all__ = (
    'API_VERSION',
    'VERSION',
)


VERSION = '0.4.0'

# ? bump together with the enum codes in slashkit.discord.enums
API_VERSION = 10
