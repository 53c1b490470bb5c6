"""
otp_core package
================

HOTP (RFC 4226) and TOTP token generation and verification.

Core algorithm
--------------
- HOTP: token = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^token_length
- TOTP: HOTP with counter = floor((timestamp + offset) / interval), 30s by default
- Dynamic truncation: 4 bytes at offset (last byte & 0x0F), top bit cleared

Quick example
-------------
>>> from otp_core import generate_secret, totp_current, totp_verify
>>> secret = generate_secret(secret_format="base32")
>>> token = totp_current(secret, secret_format="base32")
>>> totp_verify(secret, token, secret_format="base32", acceptable_past_tokens=1)
True

Options can be given as keywords or as a TokenConfig / TotpConfig record.
Storage of secrets, provisioning URIs and rate limiting belong to the caller.
"""

from typing import Optional

from . import hotp, totp
from .encoding import Secret, SecretFormat, decode_secret, encode_secret
from .errors import InvalidFormat, InvalidOption, OtpError, SecretDecodeError
from .options import TokenConfig, TotpConfig, resolve
from .secret import generate_secret
from .totp import Clock, wall_clock

__all__ = [
    "Clock",
    "InvalidFormat",
    "InvalidOption",
    "OtpError",
    "Secret",
    "SecretDecodeError",
    "SecretFormat",
    "TokenConfig",
    "TotpConfig",
    "decode_secret",
    "encode_secret",
    "generate_secret",
    "hotp_generate",
    "hotp_resync",
    "hotp_verify",
    "totp_current",
    "totp_remaining_seconds",
    "totp_time_interval",
    "totp_verify",
    "wall_clock",
]


def hotp_generate(secret: Secret, counter: int,
                  config: Optional[TokenConfig] = None, **options) -> str:
    """HOTP token for ``counter``."""
    return hotp.generate_token(secret, counter, resolve(TokenConfig, config, options))


def hotp_verify(secret: Secret, token: str, counter: int,
                config: Optional[TokenConfig] = None, **options) -> bool:
    """True when ``token`` matches the HOTP token for ``counter``."""
    return hotp.same_secret(secret, token, counter, resolve(TokenConfig, config, options))


def hotp_resync(secret: Secret, token: str, counter: int, look_ahead: int = 0,
                config: Optional[TokenConfig] = None, **options) -> Optional[int]:
    """First counter in ``counter .. counter + look_ahead`` matching ``token``, else None."""
    return hotp.resync(secret, token, counter, look_ahead,
                       resolve(TokenConfig, config, options))


def totp_current(secret: Secret, config: Optional[TotpConfig] = None,
                 clock: Clock = wall_clock, **options) -> str:
    """TOTP token for the current (or injected) time."""
    return totp.current_token_value(secret, resolve(TotpConfig, config, options), clock)


def totp_time_interval(config: Optional[TotpConfig] = None,
                       clock: Clock = wall_clock, **options) -> int:
    """The TOTP counter for the current (or injected) time."""
    return totp.time_interval(resolve(TotpConfig, config, options), clock)


def totp_remaining_seconds(config: Optional[TotpConfig] = None,
                           clock: Clock = wall_clock, **options) -> int:
    """Seconds left before the current TOTP token expires."""
    return totp.remaining_seconds(resolve(TotpConfig, config, options), clock)


def totp_verify(secret: Secret, token: str, config: Optional[TotpConfig] = None,
                clock: Clock = wall_clock, full_scan: bool = False, **options) -> bool:
    """
    Verify a TOTP token, tolerating ``acceptable_past_tokens`` /
    ``acceptable_future_tokens`` intervals of clock drift.
    """
    return totp.same_secret(secret, token, resolve(TotpConfig, config, options),
                            clock, full_scan=full_scan)
