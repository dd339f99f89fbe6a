"""Transaction contracts: the handle driven by the retry executor and the UoW."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from authgate.repositories import RevokedTokenRepository, UserRepository


class TransactionHandle(Protocol):
    """
    Savepoint-capable transaction, as driven by the retry executor.

    ``rollback_to_savepoint`` undoes everything since ``begin_savepoint``
    and leaves the savepoint armed so the work can run again.
    """

    def begin_savepoint(self) -> None: ...
    def release_savepoint(self) -> None: ...
    def rollback_to_savepoint(self) -> None: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class UnitOfWork(ABC):
    """
    One transactional boundary plus the repositories that share it.

    Used directly as a context manager it commits on a clean exit and rolls
    back otherwise; under the retry executor the same object is driven
    through :class:`TransactionHandle` instead.
    """

    users: UserRepository
    revoked_tokens: RevokedTokenRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
