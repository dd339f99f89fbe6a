"""bcrypt adapter implementing the :class:`PasswordHasher` port."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 15


class BcryptPasswordHasher:
    """
    Hash and verify passwords with bcrypt at a fixed cost.

    bcrypt only reads the first 72 bytes of its input; longer passwords are
    rejected at the API boundary rather than silently truncated here.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def compare(self, hashed: str, plaintext: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # malformed or foreign hash
            return False
