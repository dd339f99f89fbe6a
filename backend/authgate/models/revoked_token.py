"""Revocation ledger rows: one per token string ever logged out."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from authgate.core.extensions import db


class RevokedToken(db.Model):
    """
    A session token that must never be trusted again.

    The raw token string is the key, so revocation does not depend on the
    token being parseable. ``expires_at`` is the token's own expiry when it
    could be read; rows past that instant can be purged because expiry alone
    already rejects the token.
    """

    __tablename__ = "revoked_tokens"

    token: Mapped[str] = mapped_column(Text, primary_key=True)
    revoked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_revoked_tokens_expires_at", "expires_at"),)

    def __repr__(self) -> str:
        return f"<RevokedToken revoked_at={self.revoked_at}>"
