"""
options.py - Defaults, limits and the option records shared by HOTP and TOTP.

TokenConfig / TotpConfig are frozen dataclasses validated once in
``__post_init__``; the algorithms never see an invalid value. Callers can pass
either a record or plain keyword options, see ``resolve``.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar

from .encoding import SecretFormat
from .errors import InvalidOption

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # RFC 4226 recommends at least 6
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
SECRET_BYTES = 20           # 160-bit secret (RFC 4226 section 4, R6)
MAX_SECRET_BYTES = 1024
MAX_TOKEN_LENGTH = 100
MAX_ACCEPTABLE_TOKENS = 10  # per side of the TOTP verification window
MAX_LOOK_AHEAD = 20         # HOTP resynchronisation window


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_int(option: str, value: Any, minimum: Optional[int] = None,
              maximum: Optional[int] = None) -> int:
    """Validate an integer option, raising InvalidOption when it is out of range."""
    if not _is_int(value):
        raise InvalidOption(option, value, "must be an integer")
    if minimum is not None and value < minimum:
        raise InvalidOption(option, value, f"must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise InvalidOption(option, value, f"must be <= {maximum}")
    return value


@dataclass(frozen=True)
class TokenConfig:
    """Options understood by the HOTP engine."""

    secret_format: SecretFormat = SecretFormat.BINARY
    token_length: int = DEFAULT_DIGITS

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "secret_format", SecretFormat.parse(self.secret_format))
        check_int("token_length", self.token_length, 1, MAX_TOKEN_LENGTH)


@dataclass(frozen=True)
class TotpConfig(TokenConfig):
    """
    Options understood by the TOTP engine.

    injected_timestamp overrides the clock; it exists for deterministic
    tests and for verifying a token against a known instant.
    """

    interval_seconds: int = DEFAULT_TIME_STEP
    offset_seconds: int = 0
    injected_timestamp: Optional[int] = None
    acceptable_past_tokens: int = 0
    acceptable_future_tokens: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()
        check_int("interval_seconds", self.interval_seconds, 1)
        check_int("offset_seconds", self.offset_seconds)
        if self.injected_timestamp is not None:
            check_int("injected_timestamp", self.injected_timestamp)
        check_int("acceptable_past_tokens", self.acceptable_past_tokens,
                  0, MAX_ACCEPTABLE_TOKENS)
        check_int("acceptable_future_tokens", self.acceptable_future_tokens,
                  0, MAX_ACCEPTABLE_TOKENS)


C = TypeVar("C", bound=TokenConfig)


def resolve(cls: Type[C], config: Optional[TokenConfig] = None,
            options: Optional[Dict[str, Any]] = None) -> C:
    """
    Build a ``cls`` record from an optional base record plus keyword options.

    A TokenConfig passed where a TotpConfig is needed is widened, keeping its
    fields. Keywords override the base record. Unknown keywords raise
    InvalidOption.
    """
    options = dict(options or {})
    known = {f.name for f in dataclasses.fields(cls)}
    for name in options:
        if name not in known:
            raise InvalidOption(name, options[name], "unknown option")

    if config is None:
        return cls(**options)
    if not isinstance(config, TokenConfig):
        raise InvalidOption("config", type(config).__name__, "expected a TokenConfig")
    if isinstance(config, cls):
        return dataclasses.replace(config, **options) if options else config

    base = {f.name: getattr(config, f.name) for f in dataclasses.fields(config)
            if f.name in known}
    base.update(options)
    return cls(**base)
