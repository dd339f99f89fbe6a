"""Column mixins shared by the account and revocation models."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column


def new_id() -> str:
    """Return a fresh opaque identifier (UUID4 in canonical text form)."""
    return str(uuid4())


def _db_timestamp(**kwargs: Any) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), **kwargs
    )


class TimestampMixin:
    """``created_at`` / ``updated_at`` stamped by the database clock."""

    created_at: Mapped[datetime] = _db_timestamp()
    updated_at: Mapped[datetime] = _db_timestamp(onupdate=func.now())


class UUIDPKMixin:
    """Expose an opaque string primary key column named ``id``.

    Identifiers are generated client-side so they are known before flush and
    never leak row counts.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class ReprMixin:
    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"
