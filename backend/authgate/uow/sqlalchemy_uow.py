"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from sqlalchemy.orm import Session, SessionTransaction

from authgate.core.extensions import db
from authgate.repositories import RevokedTokenRepository, UserRepository
from authgate.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.revoked_tokens = RevokedTokenRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    Besides the context-manager protocol it implements
    :class:`~authgate.uow.base.TransactionHandle`: the savepoint is a
    SQLAlchemy nested transaction (``SAVEPOINT`` / ``RELEASE SAVEPOINT`` /
    ``ROLLBACK TO SAVEPOINT``) inside the session's outer transaction.
    """

    def __init__(self, session: Session | None = None) -> None:
        super().__init__(session=session if session is not None else db.session)
        self._savepoint: SessionTransaction | None = None

    # ------------------------- TransactionHandle -------------------------

    def begin_savepoint(self) -> None:
        self._savepoint = self.session.begin_nested()

    def release_savepoint(self) -> None:
        """Flush pending work and release the savepoint.

        This is the last point where a serialization conflict can surface.
        """
        self._require_savepoint().commit()
        self._savepoint = None

    def rollback_to_savepoint(self) -> None:
        self._require_savepoint().rollback()
        self._savepoint = self.session.begin_nested()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self._savepoint = None
        self.session.rollback()

    def _require_savepoint(self) -> SessionTransaction:
        if self._savepoint is None:
            raise RuntimeError("No active savepoint; call begin_savepoint() first.")
        return self._savepoint
