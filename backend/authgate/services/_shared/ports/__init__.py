"""
authgate.services._shared.ports
===============================

*Ports* (hexagonal interfaces) the auth services depend on. Concrete
adapters live under ``authgate.infra``; test doubles only need to match the
method shapes.

Modules
-------
- :mod:`token_provider`: signing and parsing of session tokens.
- :mod:`password_hasher`: adaptive password hashing.
- :mod:`identity_validator`: verification of externally issued ID tokens.
"""

from __future__ import annotations

from .identity_validator import IdentityValidationError, IdentityValidator, VerifiedIdentity
from .password_hasher import PasswordHasher
from .token_provider import TokenProvider

__all__ = [
    "IdentityValidationError",
    "IdentityValidator",
    "PasswordHasher",
    "TokenProvider",
    "VerifiedIdentity",
]
