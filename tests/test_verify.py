from __future__ import annotations
from slashkit.discord.verify import verify_interaction, verify_signature
from slashkit.discord.models.interaction import PingInteraction
from slashkit.errors import InvalidSignature, MalformedPayload
from conftest import interaction_payload
from nacl.signing import SigningKey
import orjson
import pytest


TIMESTAMP = '1729296000'


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def public_key(signing_key: SigningKey) -> str:
    return signing_key.verify_key.encode().hex()


def sign(signing_key: SigningKey, body: bytes, timestamp: str = TIMESTAMP) -> str:
    return signing_key.sign(timestamp.encode() + body).signature.hex()


def test_valid_signature_parses_interaction(
    signing_key: SigningKey,
    public_key: str
) -> None:
    body = orjson.dumps(interaction_payload(1))

    interaction = verify_interaction(
        public_key, sign(signing_key, body), TIMESTAMP, body)

    assert isinstance(interaction, PingInteraction)


def test_str_body_is_accepted(signing_key: SigningKey, public_key: str) -> None:
    body = orjson.dumps(interaction_payload(1))

    verify_signature(
        public_key, sign(signing_key, body), TIMESTAMP, body.decode())


def test_tampered_body(signing_key: SigningKey, public_key: str) -> None:
    body = orjson.dumps(interaction_payload(1))
    signature = sign(signing_key, body)

    with pytest.raises(InvalidSignature):
        verify_interaction(
            public_key, signature, TIMESTAMP, body.replace(b'en-US', b'en-GB'))


def test_wrong_timestamp(signing_key: SigningKey, public_key: str) -> None:
    body = orjson.dumps(interaction_payload(1))

    with pytest.raises(InvalidSignature):
        verify_signature(
            public_key, sign(signing_key, body), '1729296001', body)


@pytest.mark.parametrize(
    ('key', 'signature'),
    [
        ('not hex', '00' * 64),
        ('00' * 31, '00' * 64),
        (None, 'zz'),
        (None, '00' * 12),
    ]
)
def test_malformed_key_or_signature(
    public_key: str,
    key: str | None,
    signature: str
) -> None:
    with pytest.raises(InvalidSignature):
        verify_signature(key or public_key, signature, TIMESTAMP, b'{}')


def test_signature_checked_before_parse(
    signing_key: SigningKey,
    public_key: str
) -> None:
    body = b'not json'

    with pytest.raises(InvalidSignature):
        verify_interaction(public_key, '00' * 64, TIMESTAMP, body)

    with pytest.raises(MalformedPayload):
        verify_interaction(public_key, sign(signing_key, body), TIMESTAMP, body)
