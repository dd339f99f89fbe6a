"""Authentication endpoints backed by :class:`AuthService`."""

from __future__ import annotations

from flask import Blueprint, g, request

from authgate.api.deps import (
    find_token,
    get_auth_service,
    json_response,
    require_auth,
    timing,
)
from authgate.schemas import (
    CredentialsSchema,
    GoogleSignInSchema,
    LogoutSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from authgate.services._shared.errors import InvalidTokenError

bp = Blueprint("auth", __name__)

credentials_schema = CredentialsSchema()
register_schema = RegisterSchema()
logout_schema = LogoutSchema()
google_schema = GoogleSignInSchema()
token_schema = TokenPairSchema()
user_schema = UserSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return its public representation."""
    dto = register_schema.load(request.get_json(silent=True) or {})
    user = get_auth_service().register(dto)
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@timing
def login():
    """Exchange username and password for an access/refresh token pair."""
    credentials = credentials_schema.load(request.get_json(silent=True) or {})
    pair = get_auth_service().login(credentials)
    return json_response(token_schema.dump(pair))


@bp.post("/logout")
@timing
def logout():
    """Revoke the token named in the body, else the one presented on the request.

    The token is not verified first, so an expired access token does not
    stop the caller from revoking its still-live refresh token.
    """
    data = logout_schema.load(request.get_json(silent=True) or {})
    token = data["token"] or find_token()
    if token is None:
        raise InvalidTokenError("Missing session token")
    get_auth_service().logout(token)
    return "", 204


@bp.post("/google")
@timing
def google_sign_in():
    """Exchange a Google ID token for a local token pair."""
    data = google_schema.load(request.get_json(silent=True) or {})
    pair = get_auth_service().validate_federated_token(data["id_token"], data["audience"])
    return json_response(token_schema.dump(pair))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user profile."""
    return json_response({"data": user_schema.dump(g.current_user)})
