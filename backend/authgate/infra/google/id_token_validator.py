"""
Google ID token validation against Google's published JWKS.

Implements the :class:`IdentityValidator` port: RS256 signature from the
key named by the token's ``kid``, audience, issuer and expiry. Network and
key-lookup failures are validation failures too, so callers only ever see
:class:`IdentityValidationError`.
"""

from __future__ import annotations

import logging

import jwt
from jwt import PyJWKClient

from authgate.services._shared.ports.identity_validator import (
    IdentityValidationError,
    VerifiedIdentity,
)

log = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")
ALGORITHMS = ["RS256"]


class GoogleIDTokenValidator:
    """
    Verify Google-issued ID tokens.

    :param certs_url: JWKS endpoint; signing keys are cached by
        :class:`jwt.PyJWKClient` between calls.
    :param jwks_client: Pre-built client, mainly for tests.
    """

    def __init__(
        self,
        certs_url: str = GOOGLE_CERTS_URL,
        *,
        jwks_client: PyJWKClient | None = None,
        leeway: int = 30,
    ) -> None:
        self.jwks_client = jwks_client or PyJWKClient(certs_url, cache_keys=True)
        self.leeway = leeway

    def validate(self, id_token: str, audience: str) -> VerifiedIdentity:
        if not audience:
            raise IdentityValidationError("audience is required")
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(id_token)
            claims = jwt.decode(
                id_token,
                signing_key.key,
                algorithms=ALGORITHMS,
                audience=audience,
                leeway=self.leeway,
                options={"require": ["exp", "iat", "iss", "sub", "aud"]},
            )
        except jwt.PyJWTError as exc:
            log.info("google id token rejected: %s", type(exc).__name__)
            raise IdentityValidationError(str(exc)) from exc

        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise IdentityValidationError("unexpected issuer")

        email = claims.get("email")
        return VerifiedIdentity(
            subject=str(claims["sub"]),
            email=email if isinstance(email, str) else None,
            # some issuers send the flag as a string
            email_verified=claims.get("email_verified") in (True, "true"),
            claims=claims,
        )
