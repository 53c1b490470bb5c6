"""
totp.py - Time-based one-time passwords.

TOTP is HOTP with counter = floor((timestamp + offset_seconds) / interval_seconds).
The timestamp is ``injected_timestamp`` when set, otherwise ``clock()``;
production code keeps the default ``wall_clock`` and tests inject a value.
"""

import dataclasses
import logging
import time
from typing import Callable, Optional

from . import hotp
from .encoding import Secret
from .options import TotpConfig

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def wall_clock() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


def current_timestamp(config: TotpConfig, clock: Clock = wall_clock) -> int:
    if config.injected_timestamp is not None:
        return config.injected_timestamp
    return int(clock())


def time_interval(config: Optional[TotpConfig] = None, clock: Clock = wall_clock) -> int:
    """
    The HOTP counter for the configured instant.

    Floor division keeps intervals contiguous across zero, so shifting
    ``offset_seconds`` by k * interval_seconds shifts the result by exactly k.
    """
    config = config or TotpConfig()
    timestamp = current_timestamp(config, clock)
    return (timestamp + config.offset_seconds) // config.interval_seconds


def remaining_seconds(config: Optional[TotpConfig] = None, clock: Clock = wall_clock) -> int:
    """Seconds until the current interval rolls over, in [1, interval_seconds]."""
    config = config or TotpConfig()
    timestamp = current_timestamp(config, clock)
    return config.interval_seconds - ((timestamp + config.offset_seconds) % config.interval_seconds)


def current_token_value(secret: Secret, config: Optional[TotpConfig] = None,
                        clock: Clock = wall_clock) -> str:
    """
    The token for the current time interval.

    Every HOTP option (secret_format, token_length) passes through unchanged.
    """
    config = config or TotpConfig()
    counter = time_interval(config, clock)
    logger.debug("TOTP interval=%d (step %ds, offset %ds)",
                 counter, config.interval_seconds, config.offset_seconds)
    return hotp.generate_token(secret, counter, config)


def same_secret(secret: Secret, token: str, config: Optional[TotpConfig] = None,
                clock: Clock = wall_clock, full_scan: bool = False) -> bool:
    """
    Verify ``token`` against a window of intervals around the current one.

    Offsets k in [-acceptable_past_tokens, acceptable_future_tokens] are
    tried in order with offset_seconds = k * interval_seconds + offset_seconds.
    The scan stops at the first match, which reveals the matching offset
    through timing; ``full_scan=True`` always computes the whole window.
    """
    config = config or TotpConfig()
    # one instant for the whole window
    config = dataclasses.replace(config, injected_timestamp=current_timestamp(config, clock))

    matched = False
    for k in range(-config.acceptable_past_tokens, config.acceptable_future_tokens + 1):
        trial = dataclasses.replace(
            config, offset_seconds=k * config.interval_seconds + config.offset_seconds
        )
        if hotp.tokens_equal(token, current_token_value(secret, trial, clock)):
            logger.debug("TOTP token matched at window offset %d", k)
            if not full_scan:
                return True
            matched = True
    return matched
