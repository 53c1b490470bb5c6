"""
otp_backend package - Flask JSON API over otp_core.

Exposes create_app(); see otp_backend/routes.py for the endpoints.
"""

from .app import create_app

__all__ = ["create_app"]
