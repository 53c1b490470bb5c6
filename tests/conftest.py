import pytest

from otp_backend import create_app

# RFC 4226 Appendix D / RFC 6238 Appendix B (SHA-1) shared secret
RFC_SECRET = b"12345678901234567890"
RFC_SECRET_B32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
RFC_SECRET_B64 = "MTIzNDU2Nzg5MDEyMzQ1Njc4OTA="

# HOTP tokens for counters 0..9
RFC4226_TOKENS = [
    "755224", "287082", "359152", "969429", "338314",
    "254676", "287922", "162583", "399871", "520489",
]
# Decimal value of the truncated 31-bit integer for counters 0..9
RFC4226_TRUNCATED = [
    1284755224, 1094287082, 137359152, 1726969429, 1640338314,
    868254676, 1918287922, 82162583, 673399871, 645520489,
]


@pytest.fixture()
def app():
    app = create_app({"TESTING": True, "DEFAULT_SECRET_FORMAT": "base32"})
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()
