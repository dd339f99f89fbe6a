"""Unit tests for RevocationLedger."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from authgate.stores import RevocationLedger


@pytest.fixture()
def ledger(session):
    return RevocationLedger()


class TestRevocationLedger:
    def test_revocation_is_monotonic(self, ledger):
        assert not ledger.is_revoked("t1")

        ledger.add_revoked_token("t1")
        ledger.add_revoked_token("t1")

        assert ledger.is_revoked("t1")

    def test_any_string_can_be_revoked(self, ledger):
        ledger.add_revoked_token("not even a jwt")
        assert ledger.is_revoked("not even a jwt")

    def test_purge_expired_keeps_unexpired_entries(self, ledger):
        now = datetime(2030, 1, 1, tzinfo=UTC)
        ledger.add_revoked_token("old", expires_at=now - timedelta(hours=1))
        ledger.add_revoked_token("fresh", expires_at=now + timedelta(hours=1))
        ledger.add_revoked_token("forever")

        assert ledger.purge_expired(now) == 1
        assert ledger.is_revoked("fresh")
        assert ledger.is_revoked("forever")
        assert not ledger.is_revoked("old")
