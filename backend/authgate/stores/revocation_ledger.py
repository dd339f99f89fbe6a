"""Revocation ledger adapter over the transaction executor."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from authgate.uow.executor import RetryableTransactionExecutor
from authgate.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class RevocationLedger:
    """
    Persisted set of token strings that must never be trusted again.

    Membership is by exact string, independent of whether the token parses.
    Adding is idempotent and entries are never removed before the token's own
    expiry, so revocation is monotonic.
    """

    def __init__(self, executor: RetryableTransactionExecutor | None = None) -> None:
        self.executor = executor or RetryableTransactionExecutor()

    def add_revoked_token(self, token: str, *, expires_at: datetime | None = None) -> None:
        self.executor.run(
            lambda uow: uow.revoked_tokens.add_revoked_token(token, expires_at=expires_at)
        )

    def is_revoked(self, token: str) -> bool:
        return self.executor.run(lambda uow: uow.revoked_tokens.is_revoked(token))

    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop entries whose token has expired on its own.

        :returns: Number of entries removed.
        """
        cutoff = now or datetime.now(UTC)

        def work(uow: SQLAlchemyUnitOfWork) -> int:
            return uow.revoked_tokens.purge_expired(cutoff)

        removed = self.executor.run(work)
        log.info("purged %d expired revocation entries", removed)
        return removed
