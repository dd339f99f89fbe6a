from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Adaptive one-way password hashing with a cost fixed at construction."""

    def hash(self, plaintext: str) -> str: ...

    def compare(self, hashed: str, plaintext: str) -> bool:
        """``True`` only on a match; malformed hashes compare as ``False``."""
