"""
Flask application factory for the OTP HTTP API.

- CORS enabled on /api/* so a browser frontend on another origin can call it
- Registers the stateless OTP blueprint (otp_backend/routes.py)
- Maps otp_core errors to JSON 400 responses

Run locally:
    flask --app otp_backend.app:create_app run
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from otp_core import OtpError

from .config import load_config

logger = logging.getLogger(__name__)


def create_app(config: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)

    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    from .routes import otp_bp
    app.register_blueprint(otp_bp)

    @app.errorhandler(OtpError)
    def handle_otp_error(e: OtpError):
        logger.info("Rejected request: %s", e.kind)
        return jsonify({"error": e.kind, "message": str(e)}), 400

    @app.errorhandler(BadRequest)
    def handle_bad_request(e: BadRequest):
        return jsonify({"error": "BadRequest", "message": e.description}), 400

    @app.route("/healthz", methods=["GET"])
    def healthz():
        return jsonify({"status": "ok"})

    return app
