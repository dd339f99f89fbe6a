"""User repository: lookups, profile edits and (soft) deletion."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, cast

from sqlalchemy import Select, and_, select

from authgate.models.user import User
from authgate.repositories.base import BaseRepository
from authgate.services.identity.dto import UserFilter


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Authentication lookups (``find_by_*``) only ever see active,
    non-deleted accounts. It never hashes passwords nor issues tokens.
    """

    model = User

    def _updatable_fields(self) -> set[str]:
        """Profile fields; ``password_hash`` and the status flags are excluded."""
        return {"username", "email", "first_name", "last_name", "picture"}

    # ---------------------------- Lookup helpers ----------------------------

    def _live(self) -> Select[Any]:
        return select(User).where(User.active.is_(True), User.deleted.is_(False))

    def find_by_username(self, username: str) -> User | None:
        """Fetch an active, non-deleted user by exact username."""
        stmt = self._live().where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_email(self, email: str) -> User | None:
        """Fetch an active, non-deleted user by email (case-insensitive)."""
        stmt = self._live().where(User.email == email.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_id(self, user_id: str) -> User | None:
        """Fetch an active, non-deleted user by primary key."""
        stmt = self._live().where(User.id == user_id)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_all(self, criteria: UserFilter | None = None) -> list[User]:
        """List users matching every non-``None`` criterion, ordered by id.

        Unlike the ``find_by_*`` lookups this sees inactive and deleted rows
        unless ``active`` / ``deleted`` say otherwise.
        """
        criteria = criteria or UserFilter()
        clauses: list[Any] = []
        if criteria.email is not None:
            clauses.append(User.email == criteria.email.strip().lower())
        if criteria.first_name is not None:
            clauses.append(User.first_name == criteria.first_name)
        if criteria.last_name is not None:
            clauses.append(User.last_name == criteria.last_name)
        if criteria.active is not None:
            clauses.append(User.active.is_(criteria.active))
        if criteria.deleted is not None:
            clauses.append(User.deleted.is_(criteria.deleted))
        if criteria.created_between is not None:
            start, end = criteria.created_between
            clauses.append(User.created_at.between(start, end))

        stmt = select(User)
        if clauses:
            stmt = stmt.where(and_(*clauses))
        stmt = stmt.order_by(User.id.asc())
        return list(self.session.execute(stmt).scalars().all())

    # ---------------------------- Mutations ----------------------------

    def soft_delete(self, user: User) -> User:
        """Flag ``user`` as deleted and stamp ``deleted_at``; the row stays."""
        user.deleted = True
        user.deleted_at = datetime.now(UTC)
        self.flush()
        return user
