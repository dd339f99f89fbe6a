"""Factory Boy definition for :class:`authgate.models.revoked_token.RevokedToken`."""

from __future__ import annotations

import factory
from authgate.models.revoked_token import RevokedToken

from tests.factories import BaseFactory


class RevokedTokenFactory(BaseFactory):
    """Ledger rows with an opaque token and no known expiry."""

    class Meta:
        model = RevokedToken

    token = factory.Sequence(lambda n: f"revoked-token-{n}")
    expires_at = None
