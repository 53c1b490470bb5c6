"""
encoding.py - Secret encodings (raw bytes, Base32, Base64).

SecretFormat is a closed enumeration. The encoder and decoder tables below
are keyed on every member; a new member without entries fails loudly in
``encode_secret``/``decode_secret`` and in the test suite.
"""

import base64
import binascii
import logging
from enum import Enum
from typing import Callable, Dict, Union

from .errors import InvalidFormat, InvalidOption, SecretDecodeError

logger = logging.getLogger(__name__)

Secret = Union[bytes, str]


class SecretFormat(str, Enum):
    BINARY = "binary"
    BASE32 = "base32"
    BASE64 = "base64"

    @classmethod
    def parse(cls, value) -> "SecretFormat":
        """
        Accept a member or its (case-insensitive) name.

        Raises:
            InvalidFormat: for anything else, carrying the offending value.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidFormat(value)


def _as_bytes(secret) -> bytes:
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)
    raise InvalidOption(
        "secret", type(secret).__name__,
        "binary secrets must be bytes; set secret_format for encoded text",
    )


def _as_text(secret, secret_format: "SecretFormat") -> str:
    if isinstance(secret, str):
        return secret
    if isinstance(secret, (bytes, bytearray, memoryview)):
        try:
            return bytes(secret).decode("ascii")
        except UnicodeDecodeError as e:
            raise SecretDecodeError(secret_format.value) from e
    raise InvalidOption("secret", type(secret).__name__, "expected str or bytes")


# --- Decoders ----------------------------------------------------------------
def _decode_binary(secret) -> bytes:
    return _as_bytes(secret)


def _decode_base32(secret) -> bytes:
    text = _as_text(secret, SecretFormat.BASE32)
    # authenticator apps usually drop the '=' padding
    missing_padding = len(text) % 8
    if missing_padding != 0:
        text += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(text, casefold=True)
    except (binascii.Error, ValueError) as e:
        raise SecretDecodeError(SecretFormat.BASE32.value) from e


def _decode_base64(secret) -> bytes:
    text = _as_text(secret, SecretFormat.BASE64)
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SecretDecodeError(SecretFormat.BASE64.value) from e


# --- Encoders ----------------------------------------------------------------
def _encode_binary(raw: bytes) -> bytes:
    return raw


def _encode_base32(raw: bytes) -> str:
    return base64.b32encode(raw).decode("ascii")


def _encode_base64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


DECODERS: Dict[SecretFormat, Callable[[Secret], bytes]] = {
    SecretFormat.BINARY: _decode_binary,
    SecretFormat.BASE32: _decode_base32,
    SecretFormat.BASE64: _decode_base64,
}

ENCODERS: Dict[SecretFormat, Callable[[bytes], Secret]] = {
    SecretFormat.BINARY: _encode_binary,
    SecretFormat.BASE32: _encode_base32,
    SecretFormat.BASE64: _encode_base64,
}


def decode_secret(secret: Secret, secret_format=SecretFormat.BINARY) -> bytes:
    """
    Turn a secret in the given encoding into the raw HMAC key.

    Raises:
        InvalidFormat: unknown ``secret_format``.
        SecretDecodeError: the payload is not valid for ``secret_format``.
        InvalidOption: a str was passed as a binary secret.
    """
    fmt = SecretFormat.parse(secret_format)
    key = DECODERS[fmt](secret)
    logger.debug("Decoded %s secret into a %d-byte key", fmt.value, len(key))
    return key


def encode_secret(raw: bytes, secret_format=SecretFormat.BINARY) -> Secret:
    """Encode raw secret bytes; Base32/Base64 keep their '=' padding."""
    fmt = SecretFormat.parse(secret_format)
    return ENCODERS[fmt](_as_bytes(raw))
