"""Revocation ledger repository (insert-or-ignore keyed by token string)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, exists, select
from sqlalchemy.dialects import postgresql, sqlite

from authgate.models.revoked_token import RevokedToken
from authgate.repositories.base import BaseRepository

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RevokedTokenRepository(BaseRepository[RevokedToken]):
    """Persistence for :class:`RevokedToken` rows.

    Rows are only ever added or purged, never updated, so a revoked token
    cannot become valid again through this repository.
    """

    model = RevokedToken

    def _pk_attr(self):
        return RevokedToken.token

    def add_revoked_token(self, token: str, *, expires_at: datetime | None = None) -> None:
        """Record ``token`` as revoked. Re-adding an existing token is a no-op.

        :param token: Raw token string, stored verbatim.
        :param expires_at: The token's natural expiry, when it could be read.
        """
        insert = _UPSERT_INSERTS.get(self.dialect)
        if insert is not None:
            stmt = (
                insert(RevokedToken)
                .values(token=token, expires_at=expires_at)
                .on_conflict_do_nothing(index_elements=[RevokedToken.token])
            )
            self.session.execute(stmt)
            return

        if not self.is_revoked(token):
            self.add(RevokedToken(token=token, expires_at=expires_at))

    def is_revoked(self, token: str) -> bool:
        """Return ``True`` when ``token`` is present in the ledger."""
        stmt = select(exists().where(RevokedToken.token == token))
        return bool(self.session.execute(stmt).scalar())

    def purge_expired(self, now: datetime) -> int:
        """Delete entries whose token expired before ``now``.

        Entries without a known expiry are kept forever.

        :returns: Number of rows removed.
        """
        stmt = delete(RevokedToken).where(
            RevokedToken.expires_at.is_not(None),
            RevokedToken.expires_at < now,
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)
