"""Executor-backed persistence adapters used by the auth services."""

from __future__ import annotations

from .revocation_ledger import RevocationLedger
from .user_store import UserStore

__all__ = ["RevocationLedger", "UserStore"]
