"""CORS policy for the authentication API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from authgate.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Configure CORS for ``/api/*`` from ``CORS_ORIGINS``.

    Browsers only send the session cookie cross-origin with credentials, so
    credentials are allowed when cookies are an accepted token location and
    the origin list is explicit. A blank value or ``"*"`` opens every origin
    without credentials.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]
    cookie_tokens = "cookies" in app.config.get("TOKEN_LOCATIONS", ())

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=cookie_tokens and not wildcard,
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        methods=["GET", "POST", "OPTIONS"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
