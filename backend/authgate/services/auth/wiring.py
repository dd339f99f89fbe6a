"""Compose :class:`AuthService` from application configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from authgate.infra.google.id_token_validator import GOOGLE_CERTS_URL, GoogleIDTokenValidator
from authgate.infra.jwt.pyjwt_token_provider import JWTTokenProvider, SigningKey
from authgate.infra.security.bcrypt_hasher import BcryptPasswordHasher
from authgate.services._shared.ports.identity_validator import IdentityValidator
from authgate.services.auth.dto import AuthTokenConfig
from authgate.services.auth.federated import FederatedIdentityVerifier
from authgate.services.auth.service import AuthService
from authgate.services.auth.tokens import TokenIssuerVerifier
from authgate.stores.revocation_ledger import RevocationLedger
from authgate.stores.user_store import UserStore
from authgate.uow.executor import RetryableTransactionExecutor
from authgate.uow.retry import DEFAULT_MAX_RETRIES, RetryContext


def build_auth_service(
    config: Mapping[str, Any],
    *,
    identity_validator: IdentityValidator | None = None,
) -> AuthService:
    """
    Wire the auth service graph from a Flask-style config mapping.

    The signing key is read and validated here, once; nothing downstream
    reads configuration at call time.

    :param config: Typically ``app.config``.
    :param identity_validator: Override for the Google validator (tests).
    :raises ValueError: If ``JWT_SECRET_KEY`` is shorter than 32 bytes.
    """
    executor = RetryableTransactionExecutor(
        default_context=RetryContext(
            max_retries=int(config.get("TXN_MAX_RETRIES", DEFAULT_MAX_RETRIES))
        )
    )
    users = UserStore(executor)
    ledger = RevocationLedger(executor)

    provider = JWTTokenProvider(
        SigningKey.from_text(config["JWT_SECRET_KEY"]),
        issuer=config.get("JWT_ISSUER", "authgate"),
    )
    token_cfg = AuthTokenConfig()
    if "JWT_ACCESS_TOKEN_EXPIRES" in config:
        token_cfg = AuthTokenConfig(
            access_expires=config["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_expires=config.get("JWT_REFRESH_TOKEN_EXPIRES", token_cfg.refresh_expires),
        )
    tokens = TokenIssuerVerifier(provider=provider, ledger=ledger, users=users, config=token_cfg)

    validator = identity_validator or GoogleIDTokenValidator(
        config.get("GOOGLE_CERTS_URL", GOOGLE_CERTS_URL)
    )
    federated = FederatedIdentityVerifier(
        validator=validator,
        users=users,
        tokens=tokens,
        default_audience=config.get("GOOGLE_CLIENT_ID", ""),
    )

    return AuthService(
        users=users,
        ledger=ledger,
        hasher=BcryptPasswordHasher(int(config.get("BCRYPT_ROUNDS", 15))),
        tokens=tokens,
        federated=federated,
    )
