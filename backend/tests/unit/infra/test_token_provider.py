"""Unit tests for the PyJWT token provider and its signing key."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from authgate.infra.jwt.pyjwt_token_provider import JWTTokenProvider, SigningKey
from authgate.services._shared.errors import InvalidTokenError
from freezegun import freeze_time

SECRET = b"k" * 32


@pytest.fixture()
def provider():
    return JWTTokenProvider(SigningKey(SECRET), issuer="authgate")


class TestSigningKey:
    def test_rejects_short_keys(self):
        with pytest.raises(ValueError):
            SigningKey(b"too-short")

    def test_rejects_text(self):
        with pytest.raises(TypeError):
            SigningKey("k" * 32)  # type: ignore[arg-type]

    def test_repr_hides_secret(self):
        assert "k" * 32 not in repr(SigningKey(SECRET))


class TestJWTTokenProvider:
    def test_encode_decode(self, provider):
        token = provider.encode("ada", expires_in=timedelta(minutes=5))
        claims = provider.decode(token)

        assert claims["username"] == "ada"
        assert claims["iss"] == "authgate"
        assert claims["jti"]

    def test_tokens_issued_together_differ(self, provider):
        first = provider.encode("ada", expires_in=timedelta(minutes=5))
        second = provider.encode("ada", expires_in=timedelta(minutes=5))
        assert first != second

    def test_foreign_key_is_rejected(self, provider):
        other = JWTTokenProvider(SigningKey(b"x" * 32), issuer="authgate")
        token = other.encode("ada", expires_in=timedelta(minutes=5))

        with pytest.raises(InvalidTokenError):
            provider.decode(token)

    def test_foreign_issuer_is_rejected(self, provider):
        other = JWTTokenProvider(SigningKey(SECRET), issuer="someone-else")
        with pytest.raises(InvalidTokenError):
            provider.decode(other.encode("ada", expires_in=timedelta(minutes=5)))

    def test_missing_username_claim(self, provider):
        token = jwt.encode(
            {"iss": "authgate", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            provider.decode(token)

    def test_alg_none_is_rejected(self, provider):
        token = jwt.encode(
            {"username": "ada", "iss": "authgate", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            None,
            algorithm="none",
        )
        with pytest.raises(InvalidTokenError):
            provider.decode(token)

    @freeze_time("2032-06-01 08:00:00")
    def test_peek_expiry(self, provider):
        token = provider.encode("ada", expires_in=timedelta(hours=1))
        assert provider.peek_expiry(token) == datetime(2032, 6, 1, 9, 0, tzinfo=UTC)
        assert provider.peek_expiry("garbage") is None

    @pytest.mark.parametrize("exp", [1e300, 10**20, -(10**20)])
    def test_peek_expiry_out_of_range(self, provider, exp):
        token = jwt.encode({"username": "ada", "exp": exp}, "k" * 32, algorithm="HS256")
        assert provider.peek_expiry(token) is None
