"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from authgate.repositories.base import BaseRepository
from authgate.repositories.revoked_token import RevokedTokenRepository
from authgate.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "RevokedTokenRepository",
    "UserRepository",
]
