"""
secret.py - Shared secret generation.
"""

import logging
import os

from .encoding import Secret, SecretFormat, encode_secret
from .options import MAX_SECRET_BYTES, SECRET_BYTES, check_int

logger = logging.getLogger(__name__)


def generate_secret(byte_count: int = SECRET_BYTES,
                    secret_format=SecretFormat.BINARY) -> Secret:
    """
    Generate a random shared secret.

    - ``byte_count`` bytes are read from os.urandom (OS CSPRNG).
    - BINARY returns the raw bytes, BASE32 / BASE64 return RFC 4648 text with
      its '=' padding (20 bytes -> 32 Base32 chars / 28 Base64 chars).

    Raises:
        InvalidFormat: unknown ``secret_format``.
        InvalidOption: non-integer ``byte_count`` or one outside
            [0, MAX_SECRET_BYTES].
    """
    fmt = SecretFormat.parse(secret_format)
    check_int("byte_count", byte_count, 0, MAX_SECRET_BYTES)
    raw = os.urandom(byte_count)
    logger.debug("Generated %d-bit secret (%s)", byte_count * 8, fmt.value)
    return encode_secret(raw, fmt)
