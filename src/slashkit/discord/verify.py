from __future__ import annotations
from slashkit.discord.models.interaction import parse_interaction
from nacl.exceptions import BadSignatureError
from slashkit.errors import InvalidSignature
from nacl.signing import VerifyKey
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slashkit.discord.models.interaction import Interaction


__all__ = (
    'verify_interaction',
    'verify_signature',
)


def verify_signature(
    public_key: str,
    signature: str,
    timestamp: str,
    body: bytes | str
) -> None:
    """check the `X-Signature-Ed25519` header of an interaction request

    `public_key` and `signature` are hex, as shown in the developer portal
    and sent by discord
    """
    if isinstance(body, str):
        body = body.encode()

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(timestamp.encode() + body, bytes.fromhex(signature))
    except (BadSignatureError, ValueError) as e:
        raise InvalidSignature('invalid request signature') from e


def verify_interaction(
    public_key: str,
    signature: str,
    timestamp: str,
    body: bytes | str
) -> Interaction:
    verify_signature(public_key, signature, timestamp, body)
    return parse_interaction(body)
