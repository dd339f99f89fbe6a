"""Federated sign-in: map a verified external identity to a local account."""

from __future__ import annotations

import logging

from authgate.services._shared.errors import InvalidIDTokenError
from authgate.services._shared.ports.identity_validator import (
    IdentityValidationError,
    IdentityValidator,
)
from authgate.services.auth.dto import TokenPair
from authgate.services.auth.tokens import TokenIssuerVerifier
from authgate.stores.user_store import UserStore

log = logging.getLogger(__name__)


class FederatedIdentityVerifier:
    """
    Exchange an identity provider's ID token for a local token pair.

    Two failures stay distinct: :class:`InvalidIDTokenError` means the ID
    token itself is bad, while ``ResourceNotFoundError`` means the identity is
    genuine but nobody registered with its email.
    """

    def __init__(
        self,
        *,
        validator: IdentityValidator,
        users: UserStore,
        tokens: TokenIssuerVerifier,
        default_audience: str = "",
    ) -> None:
        self.validator = validator
        self.users = users
        self.tokens = tokens
        self.default_audience = default_audience

    def validate_federated_token(self, id_token: str, audience: str = "") -> TokenPair:
        audience = audience or self.default_audience
        try:
            identity = self.validator.validate(id_token, audience)
        except IdentityValidationError as exc:
            raise InvalidIDTokenError() from exc
        if not identity.email:
            raise InvalidIDTokenError("ID token carries no email claim")
        if not identity.email_verified:
            raise InvalidIDTokenError("ID token email is not verified")

        user = self.users.find_by_email(identity.email)
        log.info("federated sign-in", extra={"username": user.username})
        return self.tokens.issue_token_pair(user.username)
