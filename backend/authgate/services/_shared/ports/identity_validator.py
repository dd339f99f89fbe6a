from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


class IdentityValidationError(Exception):
    """The external ID token could not be verified (signature, audience, expiry, fetch)."""


@dataclass(frozen=True, slots=True)
class VerifiedIdentity:
    """
    Claims vouched for by the identity provider.

    :param subject: Provider-scoped stable user id (``sub``).
    :param email: Email claim, when present.
    """

    subject: str
    email: str | None
    email_verified: bool = False
    claims: Mapping[str, Any] = field(default_factory=dict)


class IdentityValidator(Protocol):
    """Black-box verifier for federated ID tokens."""

    def validate(self, id_token: str, audience: str) -> VerifiedIdentity:
        """Return the verified identity or raise :class:`IdentityValidationError`."""
