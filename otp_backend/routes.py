"""
OTP API routes - Flask blueprint.

Every endpoint is stateless: the caller sends the secret (Base32 unless
``secret_format`` says otherwise) and the options, and gets the result back.
Nothing is stored server side.

Examples:
curl -X POST http://localhost:5000/api/secret -H "Content-Type: application/json" -d "{}"
curl -X POST http://localhost:5000/api/totp -H "Content-Type: application/json" \
     -d '{"secret": "JBSWY3DPEHPK3PXP"}'
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

import otp_core
from otp_core.options import SECRET_BYTES

logger = logging.getLogger(__name__)

otp_bp = Blueprint("otp", __name__, url_prefix="/api")

TOKEN_OPTIONS = ("secret_format", "token_length")
TIME_OPTIONS = (
    "interval_seconds",
    "offset_seconds",
    "injected_timestamp",
    "acceptable_past_tokens",
    "acceptable_future_tokens",
)


def _json_body(optional: bool = False) -> dict:
    data = request.get_json(silent=True)
    if data is None and optional:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("JSON object body required")
    return data


def _require(data: dict, *fields):
    missing = [f for f in fields if f not in data]
    if missing:
        raise BadRequest(f"Missing required field(s): {', '.join(missing)}")
    return [data[f] for f in fields]


def _options(data: dict, names) -> dict:
    opts = {name: data[name] for name in names if name in data}
    opts.setdefault("secret_format", current_app.config["DEFAULT_SECRET_FORMAT"])
    return opts


@otp_bp.route("/secret", methods=["POST"])
def generate_secret():
    """
    Body: {"byte_count": 20, "format": "base32"}
    Binary secrets cannot travel in JSON, so only text formats are served.
    """
    data = _json_body(optional=True)
    fmt = otp_core.SecretFormat.parse(
        data.get("format", current_app.config["DEFAULT_SECRET_FORMAT"])
    )
    if fmt is otp_core.SecretFormat.BINARY:
        raise otp_core.InvalidOption("format", fmt.value, "binary secrets cannot be returned as JSON")
    secret = otp_core.generate_secret(data.get("byte_count", SECRET_BYTES), fmt)
    return jsonify({"secret": secret, "format": fmt.value})


@otp_bp.route("/hotp", methods=["POST"])
def hotp_token():
    """Body: {"secret": "...", "counter": 0, "token_length": 6}"""
    data = _json_body()
    secret, counter = _require(data, "secret", "counter")
    token = otp_core.hotp_generate(secret, counter, **_options(data, TOKEN_OPTIONS))
    return jsonify({"token": token, "counter": counter})


@otp_bp.route("/hotp/verify", methods=["POST"])
def hotp_verify():
    """
    Body: {"secret": "...", "token": "123456", "counter": 0, "look_ahead": 0}
    On success ``counter`` is the counter that matched.
    """
    data = _json_body()
    secret, token, counter = _require(data, "secret", "token", "counter")
    match = otp_core.hotp_resync(
        secret, token, counter, data.get("look_ahead", 0), **_options(data, TOKEN_OPTIONS)
    )
    return jsonify({"valid": match is not None, "counter": match})


@otp_bp.route("/totp", methods=["POST"])
def totp_token():
    """Body: {"secret": "...", "interval_seconds": 30, ...}"""
    data = _json_body()
    (secret,) = _require(data, "secret")
    opts = _options(data, TOKEN_OPTIONS + TIME_OPTIONS)
    # one instant for token, interval and remaining
    opts.setdefault("injected_timestamp", otp_core.wall_clock())
    config = otp_core.TotpConfig(**opts)
    return jsonify({
        "token": otp_core.totp_current(secret, config),
        "interval": otp_core.totp_time_interval(config),
        "remaining": otp_core.totp_remaining_seconds(config),
    })


@otp_bp.route("/totp/interval", methods=["POST"])
def totp_interval():
    data = _json_body(optional=True)
    opts = {name: data[name] for name in TIME_OPTIONS if name in data}
    opts.setdefault("injected_timestamp", otp_core.wall_clock())
    config = otp_core.TotpConfig(**opts)
    return jsonify({
        "interval": otp_core.totp_time_interval(config),
        "remaining": otp_core.totp_remaining_seconds(config),
    })


@otp_bp.route("/totp/verify", methods=["POST"])
def totp_verify():
    """
    Body: {"secret": "...", "token": "123456",
           "acceptable_past_tokens": 1, "acceptable_future_tokens": 1,
           "full_scan": false}
    """
    data = _json_body()
    secret, token = _require(data, "secret", "token")
    full_scan = data.get("full_scan", False)
    if not isinstance(full_scan, bool):
        raise BadRequest("full_scan must be a JSON boolean")
    valid = otp_core.totp_verify(
        secret,
        token,
        full_scan=full_scan,
        **_options(data, TOKEN_OPTIONS + TIME_OPTIONS),
    )
    logger.info("TOTP verification %s", "succeeded" if valid else "failed")
    return jsonify({"valid": valid})
