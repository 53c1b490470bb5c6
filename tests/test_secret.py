import re

import pytest

from otp_core import InvalidFormat, InvalidOption, decode_secret, generate_secret
from otp_core.options import MAX_SECRET_BYTES


def test_default_secret_is_20_raw_bytes():
    for _ in range(50):
        secret = generate_secret()
        assert isinstance(secret, bytes)
        assert len(secret) == 20


def test_base32_secret_is_32_uppercase_chars():
    for _ in range(50):
        secret = generate_secret(secret_format="base32")
        assert re.fullmatch(r"[A-Z2-7]{32}", secret)


def test_base64_secret_is_28_chars_with_padding():
    for _ in range(50):
        secret = generate_secret(secret_format="base64")
        assert re.fullmatch(r"[A-Za-z0-9+/]{27}=", secret)
        assert len(decode_secret(secret, "base64")) == 20


def test_base32_keeps_padding_for_odd_sizes():
    secret = generate_secret(byte_count=16, secret_format="base32")
    assert len(secret) == 32
    assert secret.endswith("======")
    assert len(decode_secret(secret, "base32")) == 16


def test_secrets_are_not_repeated():
    assert len({generate_secret() for _ in range(100)}) == 100


def test_zero_length_secret_is_allowed():
    assert generate_secret(0) == b""


def test_largest_allowed_secret():
    assert len(generate_secret(MAX_SECRET_BYTES)) == MAX_SECRET_BYTES


@pytest.mark.parametrize("byte_count", [-1, 2.5, "20", True, MAX_SECRET_BYTES + 1, 2 ** 64])
def test_invalid_byte_count(byte_count):
    with pytest.raises(InvalidOption) as excinfo:
        generate_secret(byte_count)
    assert excinfo.value.option == "byte_count"


def test_unknown_format_carries_the_value():
    with pytest.raises(InvalidFormat) as excinfo:
        generate_secret(secret_format="base16")
    assert excinfo.value.value == "base16"
