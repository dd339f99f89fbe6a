"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, post_load, validate

from authgate.services.auth.dto import Credentials
from authgate.services.identity.dto import UserRegisterIn

# bcrypt reads at most 72 bytes
PASSWORD_LENGTH = validate.Length(min=8, max=72)


class CredentialsSchema(Schema):
    """Input payload for authenticating a user."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, validate=validate.Length(min=1, max=72))

    @post_load
    def to_dto(self, data, **kwargs) -> Credentials:
        return Credentials(**data)


class RegisterSchema(Schema):
    """Input payload for account registration."""

    username = fields.String(required=True, validate=validate.Length(min=3, max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, load_only=True, validate=PASSWORD_LENGTH)
    first_name = fields.String(load_default=None, validate=validate.Length(max=100))
    last_name = fields.String(load_default=None, validate=validate.Length(max=100))
    picture = fields.Url(load_default=None, validate=validate.Length(max=512))

    @post_load
    def to_dto(self, data, **kwargs) -> UserRegisterIn:
        return UserRegisterIn(**data)


class LogoutSchema(Schema):
    """Optional explicit token to revoke; defaults to the request's own token."""

    token = fields.String(load_default=None, validate=validate.Length(min=1))


class GoogleSignInSchema(Schema):
    """Federated sign-in payload."""

    id_token = fields.String(required=True, validate=validate.Length(min=1))
    audience = fields.String(load_default="")


class TokenPairSchema(Schema):
    """Response payload containing an access/refresh token pair."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    token_type = fields.Constant("bearer")


class UserSchema(Schema):
    """Public user representation; the password hash is never dumped."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    first_name = fields.String(allow_none=True)
    last_name = fields.String(allow_none=True)
    picture = fields.String(allow_none=True)
    active = fields.Boolean()
    created_at = fields.DateTime(allow_none=True)
