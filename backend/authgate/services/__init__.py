"""Service layer public API.

Re-exports
----------
- Errors (from ``authgate.services._shared.errors``)
    * :class:`ServiceError`, :class:`AuthError`, :class:`InvalidCredentialsError`,
      :class:`InvalidTokenError`, :class:`InvalidIDTokenError`,
      :class:`ResourceNotFoundError`, :class:`ConflictError`

- Identity DTOs (from ``authgate.services.identity.dto``)
    * :class:`UserRegisterIn`, :class:`UserUpdateIn`, :class:`UserFilter`,
      :class:`UserRecord`

The services themselves live in :mod:`authgate.services.auth.service` and are
assembled by :func:`authgate.services.auth.wiring.build_auth_service`.
"""

from __future__ import annotations

from ._shared.errors import (
    AuthError,
    ConflictError,
    InvalidCredentialsError,
    InvalidIDTokenError,
    InvalidTokenError,
    ResourceNotFoundError,
    ServiceError,
)
from .identity.dto import UserFilter, UserRecord, UserRegisterIn, UserUpdateIn

__all__ = [
    "AuthError",
    "ConflictError",
    "InvalidCredentialsError",
    "InvalidIDTokenError",
    "InvalidTokenError",
    "ResourceNotFoundError",
    "ServiceError",
    "UserFilter",
    "UserRecord",
    "UserRegisterIn",
    "UserUpdateIn",
]
