"""
Unit tests for SQLAlchemyUnitOfWork against a real (SQLite) session.
"""

from __future__ import annotations

import pytest
from authgate.models import User
from authgate.uow import RetryableTransactionExecutor, RetryContext, SQLAlchemyUnitOfWork
from sqlalchemy import func, select

from tests.factories.user import UserFactory


class SerializationFailure(Exception):
    sqlstate = "40001"


def count_users(session) -> int:
    return session.execute(select(func.count()).select_from(User)).scalar_one()


class TestSQLAlchemyUnitOfWorkWriter:
    def test_commits_on_success(self, session):
        """
        GIVEN a UoW
        WHEN we add a user inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = count_users(session)

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        assert count_users(session) == initial + 1

    def test_rolls_back_on_exception(self, session):
        initial = count_users(session)

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert count_users(session) == initial

    def test_release_without_savepoint_is_an_error(self, session):
        with pytest.raises(RuntimeError, match="No active savepoint"):
            SQLAlchemyUnitOfWork().release_savepoint()


class TestExecutorWithSavepoints:
    def test_rollback_to_savepoint_discards_the_failed_attempt(self, session):
        """
        GIVEN work that inserts a row and then hits a serialization failure once
        WHEN it runs through the executor
        THEN only the row from the successful attempt survives.
        """
        executor = RetryableTransactionExecutor(default_context=RetryContext(max_retries=3))
        attempts = []

        def work(uow):
            attempts.append(1)
            uow.users.add(UserFactory.build(username=f"retry{len(attempts)}"))
            if len(attempts) == 1:
                raise SerializationFailure()
            return uow.users.find_by_username(f"retry{len(attempts)}").id

        user_id = executor.run(work)

        assert len(attempts) == 2
        assert session.get(User, user_id).username == "retry2"
        assert session.execute(
            select(User).where(User.username == "retry1")
        ).scalar_one_or_none() is None

    def test_non_retryable_failure_rolls_everything_back(self, session):
        executor = RetryableTransactionExecutor()
        initial = count_users(session)

        def work(uow):
            uow.users.add(UserFactory.build())
            raise LookupError("nope")

        with pytest.raises(LookupError):
            executor.run(work)

        assert count_users(session) == initial
