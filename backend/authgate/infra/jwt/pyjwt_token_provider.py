"""
PyJWT adapter implementing the :class:`TokenProvider` port (HS256).

Claims
------
``username``
    Login handle the token was issued to.
``iss``
    Configured issuer; required and checked on decode.
``iat`` / ``exp``
    Issue and expiry instants (seconds since epoch, UTC).
``jti``
    Random id so two tokens issued in the same second never collide, which
    keeps revocation of one from revoking the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from authgate.services._shared.errors import InvalidTokenError

ALGORITHM = "HS256"
MIN_KEY_BYTES = 32


@dataclass(frozen=True, slots=True)
class SigningKey:
    """
    Symmetric signing key, validated once at construction.

    :param secret: Raw key bytes; at least 32 bytes for HS256.
    :raises TypeError: If ``secret`` is not ``bytes``.
    :raises ValueError: If ``secret`` is too short.
    """

    secret: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.secret, bytes):
            raise TypeError("SigningKey requires bytes")
        if len(self.secret) < MIN_KEY_BYTES:
            raise ValueError(f"SigningKey must be at least {MIN_KEY_BYTES} bytes")

    @classmethod
    def from_text(cls, value: str) -> SigningKey:
        """Build a key from configuration text (UTF-8 encoded)."""
        return cls(value.encode("utf-8"))

    def __repr__(self) -> str:
        return "SigningKey(***)"


class JWTTokenProvider:
    """Sign and verify session tokens with a fixed HS256 key."""

    def __init__(self, key: SigningKey, *, issuer: str, leeway: timedelta = timedelta(0)) -> None:
        self._key = key
        self.issuer = issuer
        self.leeway = leeway

    def encode(self, username: str, *, expires_in: timedelta) -> str:
        now = datetime.now(UTC)
        claims: dict[str, Any] = {
            "username": username,
            "iss": self.issuer,
            "iat": now,
            "exp": now + expires_in,
            "jti": uuid4().hex,
        }
        return jwt.encode(claims, self._key.secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature, issuer and expiry and return the claims.

        :raises InvalidTokenError: For any reason the token cannot be trusted.
        """
        try:
            claims = jwt.decode(
                token,
                self._key.secret,
                algorithms=[ALGORITHM],
                issuer=self.issuer,
                leeway=self.leeway,
                options={"require": ["exp", "iss", "username"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError() from exc

        username = claims.get("username")
        if not isinstance(username, str) or not username:
            raise InvalidTokenError()
        return claims

    def peek_expiry(self, token: str) -> datetime | None:
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError:
            return None
        exp = claims.get("exp")
        if not isinstance(exp, int | float):
            return None
        try:
            return datetime.fromtimestamp(exp, tz=UTC)
        except (OverflowError, ValueError, OSError):
            # out of range for the platform clock, or NaN
            return None
