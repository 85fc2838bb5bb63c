from .base import *
from .checks import *
from .choice import *
from .option import *
from .command import *
from .component import *
from .embed import *
from .user import *
from .response import *
from .interaction import *


__all__ = (
    # base.py
    'PayloadModel',
    'load_payload',
    # checks.py
    'COMMAND_NAME_PATTERN',
    # choice.py
    'Choice',
    'ChoiceValue',
    # option.py
    'CommandOption',
    'CommandOptionBuilder',
    'validate_option',
    # command.py
    'Command',
    'CommandBuilder',
    'validate_command',
    # component.py
    'ActionRow',
    'Button',
    'Component',
    'PartialEmoji',
    'SelectMenu',
    'SelectOption',
    'TextInput',
    'UnknownComponent',
    # embed.py
    'Embed',
    'EmbedAuthor',
    'EmbedField',
    'EmbedFooter',
    'EmbedImage',
    'EmbedThumbnail',
    # user.py
    'Member',
    'User',
    # response.py
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
    # interaction
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
