from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for signing and parsing session tokens."""

    def encode(self, username: str, *, expires_in: timedelta) -> str: ...

    def decode(self, token: str) -> dict[str, Any]:
        """Return verified claims or raise ``InvalidTokenError``."""

    def peek_expiry(self, token: str) -> datetime | None:
        """Read ``exp`` without verifying anything; ``None`` when unreadable."""
