"""Token issuance and verification against the revocation ledger."""

from __future__ import annotations

from authgate.services._shared.errors import InvalidTokenError
from authgate.services._shared.ports.token_provider import TokenProvider
from authgate.services.auth.dto import AuthTokenConfig, TokenPair
from authgate.services.identity.dto import UserRecord
from authgate.stores.revocation_ledger import RevocationLedger
from authgate.stores.user_store import UserStore


class TokenIssuerVerifier:
    """
    Issue token pairs and decide whether a presented token can be trusted.

    A token is trusted only when it is absent from the revocation ledger,
    correctly signed by our key, issued by us and unexpired.
    """

    def __init__(
        self,
        *,
        provider: TokenProvider,
        ledger: RevocationLedger,
        users: UserStore,
        config: AuthTokenConfig | None = None,
    ) -> None:
        self.provider = provider
        self.ledger = ledger
        self.users = users
        self.config = config or AuthTokenConfig()

    def issue_token_pair(self, username: str) -> TokenPair:
        return TokenPair(
            access_token=self.provider.encode(username, expires_in=self.config.access_expires),
            refresh_token=self.provider.encode(username, expires_in=self.config.refresh_expires),
        )

    def verify_token(self, token: str) -> UserRecord:
        """
        Resolve ``token`` to its user.

        Revocation is checked first, on the raw string, so a revoked token is
        rejected the same way whether or not it would parse.

        :raises InvalidTokenError: Revoked, malformed, badly signed or expired.
        :raises ResourceNotFoundError: Token is fine but its user is gone or
            disabled.
        """
        if self.ledger.is_revoked(token):
            raise InvalidTokenError()
        claims = self.provider.decode(token)
        return self.users.find_by_username(claims["username"])
