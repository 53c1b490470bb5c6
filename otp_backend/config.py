"""
Settings for the OTP HTTP API, read from the environment.

create_app() calls load_dotenv() before load_config(), so any of these can
live in a .env file.
"""

import os


def _split(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config() -> dict:
    return {
        # Origins allowed to call /api/* from a browser ("*" = any)
        "CORS_ORIGINS": _split(os.getenv("OTP_CORS_ORIGINS", "*")),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "info").upper(),
        # Encoding assumed when a request omits secret_format
        "DEFAULT_SECRET_FORMAT": os.getenv("OTP_DEFAULT_SECRET_FORMAT", "base32"),
    }
