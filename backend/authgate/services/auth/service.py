from __future__ import annotations

import logging
import secrets
from datetime import datetime
from functools import cached_property

from authgate.services._shared.errors import InvalidCredentialsError, ResourceNotFoundError
from authgate.services._shared.ports.password_hasher import PasswordHasher
from authgate.services.auth.dto import Credentials, TokenPair
from authgate.services.auth.federated import FederatedIdentityVerifier
from authgate.services.auth.tokens import TokenIssuerVerifier
from authgate.services.identity.dto import UserCreate, UserRecord, UserRegisterIn
from authgate.stores.revocation_ledger import RevocationLedger
from authgate.stores.user_store import UserStore

log = logging.getLogger(__name__)


class AuthService:
    """
    Authentication lifecycle: register, login, verify, logout, federated sign-in.

    Sessions are stateless signed tokens; the only server-side session state
    is the revocation ledger. Every persistence call goes through the stores,
    and therefore through the retrying transaction executor.
    """

    def __init__(
        self,
        *,
        users: UserStore,
        ledger: RevocationLedger,
        hasher: PasswordHasher,
        tokens: TokenIssuerVerifier,
        federated: FederatedIdentityVerifier,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param users: Identity lookups and account creation.
        :param ledger: Persisted set of revoked tokens.
        :param hasher: Adaptive password hashing.
        :param tokens: Token pair issuance and verification.
        :param federated: ID token to local account mapping.
        """
        self.users = users
        self.ledger = ledger
        self.hasher = hasher
        self.tokens = tokens
        self.federated = federated

    @cached_property
    def _dummy_hash(self) -> str:
        # compared against when the user does not exist, so both failures cost one bcrypt check
        return self.hasher.hash(secrets.token_urlsafe(16))

    # ------------------------------------------------------------------ #
    # Registration & login
    # ------------------------------------------------------------------ #

    def register(self, dto: UserRegisterIn) -> UserRecord:
        """
        Create an account, hashing the password before it is stored.

        :raises ConflictError: Username or email already in use.
        """
        return self.users.create(
            UserCreate(
                username=dto.username,
                email=dto.email,
                password_hash=self.hasher.hash(dto.password),
                first_name=dto.first_name,
                last_name=dto.last_name,
                picture=dto.picture,
            )
        )

    def login(self, credentials: Credentials) -> TokenPair:
        """
        Check credentials and issue a token pair.

        :raises InvalidCredentialsError: Unknown user or wrong password,
            indistinguishably.
        """
        try:
            user = self.users.find_by_username(credentials.username)
        except ResourceNotFoundError:
            self.hasher.compare(self._dummy_hash, credentials.password)
            log.info("login failed", extra={"username": credentials.username})
            raise InvalidCredentialsError() from None

        if not self.hasher.compare(user.password_hash, credentials.password):
            log.info("login failed", extra={"username": credentials.username})
            raise InvalidCredentialsError()

        return self.tokens.issue_token_pair(user.username)

    # ------------------------------------------------------------------ #
    # Session tokens
    # ------------------------------------------------------------------ #

    def verify_token(self, token: str) -> UserRecord:
        return self.tokens.verify_token(token)

    def logout(self, token: str) -> None:
        """
        Revoke ``token``. Revoking an already revoked token succeeds silently.

        The token is not verified first: any string can be revoked.
        """
        self.ledger.add_revoked_token(token, expires_at=self.tokens.provider.peek_expiry(token))
        log.info("token revoked")

    def purge_revoked_tokens(self, now: datetime | None = None) -> int:
        """Drop ledger entries for tokens that have since expired on their own."""
        return self.ledger.purge_expired(now)

    # ------------------------------------------------------------------ #
    # Federated identity
    # ------------------------------------------------------------------ #

    def validate_federated_token(self, id_token: str, audience: str = "") -> TokenPair:
        """
        Sign in with an external ID token.

        :raises InvalidIDTokenError: The ID token failed validation.
        :raises ResourceNotFoundError: No local account has the token's email.
        """
        return self.federated.validate_federated_token(id_token, audience)
