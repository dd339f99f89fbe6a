"""Test double for the federated identity validator port."""

from __future__ import annotations

from typing import Any

from authgate.services._shared.ports.identity_validator import (
    IdentityValidationError,
    VerifiedIdentity,
)


class FakeIdentityValidator:
    """Accept only ID tokens registered with :meth:`accept`.

    Every call is recorded in ``calls`` as ``(id_token, audience)``.
    """

    def __init__(self) -> None:
        self._identities: dict[str, VerifiedIdentity] = {}
        self.calls: list[tuple[str, str]] = []

    def accept(
        self,
        id_token: str,
        *,
        email: str | None,
        email_verified: bool = True,
        **claims: Any,
    ) -> None:
        self._identities[id_token] = VerifiedIdentity(
            subject=claims.pop("sub", "google-subject"),
            email=email,
            email_verified=email_verified,
            claims={"email": email, **claims},
        )

    def validate(self, id_token: str, audience: str) -> VerifiedIdentity:
        self.calls.append((id_token, audience))
        try:
            return self._identities[id_token]
        except KeyError:
            raise IdentityValidationError("unknown ID token") from None
