"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. They are the stable contract between stores, the auth services and the
API layer, which translates them to RFC 7807 responses in
``authgate/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL includes the constraint name in the message; SQLite reports the
    offending columns, so callers may pass either form.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g. ``'uq_users_email'``) or ``table.column``.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from stores or services.
    """


class AuthError(ServiceError):
    """Base for every reason a caller cannot be authenticated.

    ``code`` is the stable machine-readable identifier surfaced to clients.
    """

    code = "unauthorized"
    default_message = "Unauthorized"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(AuthError):
    """Unknown username or wrong password; the two are never distinguished."""

    code = "invalid_credentials"
    default_message = "Invalid username or password"


class InvalidTokenError(AuthError):
    """Session token is malformed, badly signed, expired or revoked."""

    code = "invalid_token"
    default_message = "Invalid or expired token"


class InvalidIDTokenError(AuthError):
    """Federated ID token failed external validation."""

    code = "invalid_id_token"
    default_message = "Invalid ID token"


@dataclass(slots=True)
class ResourceNotFoundError(ServiceError):
    """
    Raised when a lookup matches nothing.

    :param resource: Resource name (e.g., "User").
    :type resource: str
    :param condition: Search condition in ``field=value`` form.
    :type condition: str
    """

    resource: str
    condition: str

    def __str__(self) -> str:
        return f"{self.resource} with condition {self.condition} not found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"
