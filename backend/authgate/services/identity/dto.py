from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for account registration.

    :param username: Unique login handle.
    :param email: Contact and federated lookup address.
    :param password: Raw password; hashed before it reaches the store.
    """

    username: str
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    picture: str | None = None


@dataclass(frozen=True, slots=True)
class UserCreate:
    """Row-ready user payload; ``password_hash`` is already hashed."""

    username: str
    email: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    picture: str | None = None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Partial profile update. ``None`` and empty strings leave a field untouched.
    """

    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    picture: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that carry a non-empty value."""
        fields = {
            "username": self.username,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "picture": self.picture,
        }
        return {k: v for k, v in fields.items() if v}


@dataclass(frozen=True, slots=True)
class UserFilter:
    """
    Listing criteria; every ``None`` criterion is ignored.

    :param created_between: Inclusive ``(start, end)`` window on ``created_at``.
    """

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    active: bool | None = None
    deleted: bool | None = None
    created_between: tuple[datetime, datetime] | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRecord:
    """
    Detached snapshot of a user row.

    Stores hand these out instead of ORM instances so nothing outside a
    transaction can lazy-load or mutate persistent state.
    """

    id: str
    username: str
    email: str
    password_hash: str
    first_name: str | None
    last_name: str | None
    picture: str | None
    active: bool
    deleted: bool
    deleted_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, user: Any) -> UserRecord:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            picture=user.picture,
            active=user.active,
            deleted=user.deleted,
            deleted_at=user.deleted_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
