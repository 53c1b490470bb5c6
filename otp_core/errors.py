"""
errors.py - Error taxonomy for otp_core.

Every error is a ValueError subclass so callers that already guard OTP calls
with ``except ValueError`` keep working. Each carries a short ``kind`` string
that the HTTP layer returns as the ``error`` field.
"""

from typing import Any


class OtpError(ValueError):
    """Base class for every error raised by otp_core."""

    kind = "OtpError"


class InvalidFormat(OtpError):
    """Unrecognised secret encoding name."""

    kind = "InvalidFormat"

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Invalid secret format: {value!r}. "
            "Valid options are 'binary', 'base32' and 'base64'."
        )


class SecretDecodeError(OtpError):
    """The secret payload does not match its declared encoding."""

    kind = "SecretDecodeError"

    def __init__(self, secret_format: str) -> None:
        self.secret_format = secret_format
        super().__init__(
            f"Secret format specified as {secret_format}, "
            f"but the secret could not be decoded as {secret_format}."
        )


class InvalidOption(OtpError):
    """An option value is out of range, has the wrong type or is unknown."""

    kind = "InvalidOption"

    def __init__(self, option: str, value: Any, reason: str) -> None:
        self.option = option
        self.value = value
        super().__init__(f"Invalid option {option}={value!r}: {reason}")
