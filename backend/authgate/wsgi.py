"""WSGI entrypoint used by gunicorn (``authgate.wsgi:app``)."""

from __future__ import annotations

from authgate.factory import create_app

app = create_app()
