"""Marshmallow schemas for request validation and response shaping."""

from __future__ import annotations

from .auth import (
    CredentialsSchema,
    GoogleSignInSchema,
    LogoutSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)

__all__ = [
    "CredentialsSchema",
    "GoogleSignInSchema",
    "LogoutSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "UserSchema",
]
