"""
hotp.py - HMAC-based one-time passwords (RFC 4226).

Steps of ``generate_token``:
1. Decode the secret according to ``secret_format`` -> raw key bytes
2. Message = 8-byte big-endian counter
3. HMAC-SHA1(key, message) -> 20-byte digest
4. Dynamic truncation -> 31-bit integer
5. token = value % 10^token_length
6. Zero-pad to exactly token_length characters

With token_length >= 10 the 31-bit value is shorter than the token, so the
result carries extra leading zeros. That is the RFC 4226 truncation ceiling
and is kept for compatibility with every other implementation.
"""

import hashlib
import hmac
import logging
import struct
from typing import Optional

from .encoding import Secret, decode_secret
from .options import MAX_LOOK_AHEAD, TokenConfig, check_int

logger = logging.getLogger(__name__)

_COUNTER_MASK = 0xFFFFFFFFFFFFFFFF


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Counter -> 8-byte big-endian, as RFC 4226 requires.

    The counter is taken modulo 2^64, so negative values wrap like a
    two's-complement 64-bit integer.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    check_int("counter", i)
    return struct.pack(">Q", i & _COUNTER_MASK)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    offset = low nibble of byte 19; the 4 bytes at offset are read
    big-endian with the top bit cleared, giving a 31-bit unsigned integer.
    """
    offset = hmac_digest[19] & 0x0F
    code = (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )
    return code


def tokens_equal(token, expected: str) -> bool:
    """Length check first, then a constant-time compare."""
    if not isinstance(token, str) or len(token) != len(expected):
        return False
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


# --- Engine ----------------------------------------------------------------
def generate_token(secret: Secret, counter: int,
                   config: Optional[TokenConfig] = None) -> str:
    """
    Generate the HOTP token for ``counter``.

    Arguments:
        secret: raw bytes, or Base32/Base64 text per ``config.secret_format``
        counter: the moving factor; any integer, reduced modulo 2^64
        config: TokenConfig (defaults: binary secret, 6 digits)

    Raises:
        InvalidFormat, SecretDecodeError, InvalidOption
    """
    config = config or TokenConfig()
    msg = int_to_bytes(counter)
    key = decode_secret(secret, config.secret_format)

    digest = hmac.new(key, msg, hashlib.sha1).digest()
    dbc = dynamic_truncate(digest)
    otp_val = dbc % (10 ** config.token_length)
    logger.debug("HOTP computed for counter=%d, token_length=%d",
                 counter, config.token_length)
    return str(otp_val).zfill(config.token_length)


def same_secret(secret: Secret, token: str, counter: int,
                config: Optional[TokenConfig] = None) -> bool:
    """True when ``token`` is the HOTP token for ``secret`` at ``counter``."""
    return tokens_equal(token, generate_token(secret, counter, config))


def resync(secret: Secret, token: str, counter: int, look_ahead: int = 0,
           config: Optional[TokenConfig] = None) -> Optional[int]:
    """
    Look-ahead verification (RFC 4226 section 7.4).

    Tries counters ``counter .. counter + look_ahead`` in order and returns
    the first one whose token matches, or None. The caller stores
    ``match + 1`` as the next expected counter.
    """
    check_int("counter", counter)
    check_int("look_ahead", look_ahead, 0, MAX_LOOK_AHEAD)
    for i in range(look_ahead + 1):
        if same_secret(secret, token, counter + i, config):
            logger.debug("HOTP token matched at counter=%d (look-ahead %d)",
                         counter + i, i)
            return counter + i
    return None
