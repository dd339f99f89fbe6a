"""User persistence adapter: one retried transaction per call."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from authgate.models.user import User
from authgate.services._shared.errors import ConflictError, ResourceNotFoundError, violates
from authgate.services.identity.dto import UserCreate, UserFilter, UserRecord, UserUpdateIn
from authgate.uow.executor import RetryableTransactionExecutor
from authgate.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

RESOURCE = "User"


def _conflict_from(exc: IntegrityError) -> ConflictError:
    if violates(exc, "uq_users_username") or violates(exc, "users.username"):
        return ConflictError(RESOURCE, "username already taken")
    if violates(exc, "uq_users_email") or violates(exc, "users.email"):
        return ConflictError(RESOURCE, "email already registered")
    return ConflictError(RESOURCE, "constraint violated")


class UserStore:
    """
    Identity lookups and account mutations.

    Every method runs as its own logical transaction through the executor
    and returns detached :class:`UserRecord` snapshots. Lookups that match
    nothing raise :class:`ResourceNotFoundError` with a ``field=value``
    condition.
    """

    def __init__(self, executor: RetryableTransactionExecutor | None = None) -> None:
        self.executor = executor or RetryableTransactionExecutor()

    # ------------------------------ Lookups ------------------------------

    def find_by_username(self, username: str) -> UserRecord:
        def work(uow: SQLAlchemyUnitOfWork) -> UserRecord:
            user = uow.users.find_by_username(username)
            if user is None:
                raise ResourceNotFoundError(RESOURCE, f"username={username}")
            return UserRecord.from_model(user)

        return self.executor.run(work)

    def find_by_email(self, email: str) -> UserRecord:
        def work(uow: SQLAlchemyUnitOfWork) -> UserRecord:
            user = uow.users.find_by_email(email)
            if user is None:
                raise ResourceNotFoundError(RESOURCE, f"email={email}")
            return UserRecord.from_model(user)

        return self.executor.run(work)

    def find_by_id(self, user_id: str) -> UserRecord:
        def work(uow: SQLAlchemyUnitOfWork) -> UserRecord:
            user = uow.users.find_by_id(user_id)
            if user is None:
                raise ResourceNotFoundError(RESOURCE, f"id={user_id}")
            return UserRecord.from_model(user)

        return self.executor.run(work)

    def find_all(self, criteria: UserFilter | None = None) -> list[UserRecord]:
        def work(uow: SQLAlchemyUnitOfWork) -> list[UserRecord]:
            return [UserRecord.from_model(u) for u in uow.users.find_all(criteria)]

        return self.executor.run(work)

    # ----------------------------- Mutations -----------------------------

    def create(self, data: UserCreate) -> UserRecord:
        """Insert a user whose password is already hashed.

        :raises ConflictError: Username or email already in use.
        """

        def work(uow: SQLAlchemyUnitOfWork) -> UserRecord:
            user = User(
                username=data.username,
                email=data.email,
                password_hash=data.password_hash,
                first_name=data.first_name,
                last_name=data.last_name,
                picture=data.picture,
            )
            try:
                uow.users.add(user)
            except IntegrityError as exc:
                raise _conflict_from(exc) from exc
            return UserRecord.from_model(user)

        record = self.executor.run(work)
        log.info("user created", extra={"username": record.username})
        return record

    def update(self, user_id: str, changes: UserUpdateIn) -> UserRecord:
        """Apply the non-empty fields of ``changes``; an empty update is a no-op."""

        def work(uow: SQLAlchemyUnitOfWork) -> UserRecord:
            user = uow.users.find_by_id(user_id)
            if user is None:
                raise ResourceNotFoundError(RESOURCE, f"id={user_id}")
            fields = changes.changes()
            if fields:
                try:
                    uow.users.assign_updates(user, fields)
                except IntegrityError as exc:
                    raise _conflict_from(exc) from exc
            return UserRecord.from_model(user)

        return self.executor.run(work)

    def soft_delete(self, user_id: str) -> UserRecord:
        """Mark the user deleted; they disappear from every lookup."""

        def work(uow: SQLAlchemyUnitOfWork) -> UserRecord:
            user = uow.users.find_by_id(user_id)
            if user is None:
                raise ResourceNotFoundError(RESOURCE, f"id={user_id}")
            return UserRecord.from_model(uow.users.soft_delete(user))

        return self.executor.run(work)

    def delete(self, user_id: str) -> None:
        """Remove the row permanently, whatever its flags."""

        def work(uow: SQLAlchemyUnitOfWork) -> None:
            user = uow.users.get(user_id)
            if user is None:
                raise ResourceNotFoundError(RESOURCE, f"id={user_id}")
            uow.users.delete(user)

        self.executor.run(work)
