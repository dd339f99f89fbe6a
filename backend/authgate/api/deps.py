"""Shared API helpers: service wiring, token lookup and cross-cutting decorators."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from authgate.services._shared.errors import InvalidTokenError
from authgate.services.auth.service import AuthService
from authgate.services.auth.wiring import build_auth_service

F = TypeVar("F", bound=Callable[..., Any])

AUTH_SERVICE_KEY = "authgate.auth_service"
BEARER_PREFIX = "bearer "


def get_auth_service() -> AuthService:
    """Return the app-wide :class:`AuthService`, building it on first use.

    Tests (or an embedding app) can pre-seed
    ``app.extensions["authgate.auth_service"]`` to swap collaborators.
    """
    service = current_app.extensions.get(AUTH_SERVICE_KEY)
    if service is None:
        service = build_auth_service(current_app.config)
        current_app.extensions[AUTH_SERVICE_KEY] = service
    return cast(AuthService, service)


def _from_header() -> str | None:
    header = request.headers.get("Authorization", "")
    if header[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        return header[len(BEARER_PREFIX) :].strip() or None
    return None


def _from_cookie() -> str | None:
    return request.cookies.get(current_app.config.get("TOKEN_COOKIE_NAME", "jwt")) or None


def _from_query() -> str | None:
    return request.args.get(current_app.config.get("TOKEN_QUERY_PARAM", "jwt")) or None


_TOKEN_SOURCES: dict[str, Callable[[], str | None]] = {
    "headers": _from_header,
    "cookies": _from_cookie,
    "query": _from_query,
}


def find_token() -> str | None:
    """Locate the session token on the current request.

    Sources are tried in the fixed order header, cookie, query; only those
    listed in ``TOKEN_LOCATIONS`` are consulted. The query string is off by
    default because URLs end up in access logs.
    """
    enabled = set(current_app.config.get("TOKEN_LOCATIONS", ("headers", "cookies")))
    for name, source in _TOKEN_SOURCES.items():
        if name in enabled:
            token = source()
            if token:
                return token
    return None


def require_auth(func: F) -> F:
    """Verify the request's session token and expose the user as ``g.current_user``.

    ``g.token`` keeps the raw token so handlers such as logout can act on it.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = find_token()
        if token is None:
            raise InvalidTokenError("Missing session token")
        g.current_user = get_auth_service().verify_token(token)
        g.token = token
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""
    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
