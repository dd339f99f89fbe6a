"""Unit tests for GoogleIDTokenValidator with a locally generated RSA key."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from authgate.infra.google.id_token_validator import GoogleIDTokenValidator
from authgate.services._shared.ports.identity_validator import IdentityValidationError
from cryptography.hazmat.primitives.asymmetric import rsa

AUDIENCE = "client-123.apps.googleusercontent.com"


@pytest.fixture(scope="module")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


class StaticJWKS:
    """Stand-in for :class:`jwt.PyJWKClient` serving one public key."""

    def __init__(self, public_key):
        self.key = public_key

    def get_signing_key_from_jwt(self, token):
        jwt.get_unverified_header(token)
        return self


class UnreachableJWKS:
    def get_signing_key_from_jwt(self, token):
        raise jwt.PyJWKClientError("Fail to fetch data from the url")


@pytest.fixture()
def validator(rsa_key):
    return GoogleIDTokenValidator(jwks_client=StaticJWKS(rsa_key.public_key()))


def google_token(key, **overrides):
    now = datetime.now(UTC)
    claims = {
        "iss": "https://accounts.google.com",
        "aud": AUDIENCE,
        "sub": "1234567890",
        "email": "ada@example.com",
        "email_verified": True,
        "iat": now,
        "exp": now + timedelta(minutes=10),
    }
    claims.update(overrides)
    return jwt.encode(claims, key, algorithm="RS256", headers={"kid": "test-key"})


class TestGoogleIDTokenValidator:
    def test_valid_token(self, validator, rsa_key):
        identity = validator.validate(google_token(rsa_key), AUDIENCE)

        assert identity.subject == "1234567890"
        assert identity.email == "ada@example.com"
        assert identity.email_verified

    @pytest.mark.parametrize("flag", [False, "false", None])
    def test_unverified_email_flag(self, validator, rsa_key, flag):
        identity = validator.validate(google_token(rsa_key, email_verified=flag), AUDIENCE)
        assert identity.email_verified is False

    def test_wrong_audience(self, validator, rsa_key):
        with pytest.raises(IdentityValidationError):
            validator.validate(google_token(rsa_key), "someone-else")

    def test_missing_audience(self, validator, rsa_key):
        with pytest.raises(IdentityValidationError):
            validator.validate(google_token(rsa_key), "")

    def test_foreign_issuer(self, validator, rsa_key):
        with pytest.raises(IdentityValidationError, match="issuer"):
            validator.validate(google_token(rsa_key, iss="https://evil.example"), AUDIENCE)

    def test_expired(self, validator, rsa_key):
        past = datetime.now(UTC) - timedelta(hours=2)
        token = google_token(rsa_key, iat=past, exp=past + timedelta(minutes=10))
        with pytest.raises(IdentityValidationError):
            validator.validate(token, AUDIENCE)

    def test_signed_by_another_key(self, validator):
        stranger = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        with pytest.raises(IdentityValidationError):
            validator.validate(google_token(stranger), AUDIENCE)

    def test_key_fetch_failure(self, rsa_key):
        validator = GoogleIDTokenValidator(jwks_client=UnreachableJWKS())
        with pytest.raises(IdentityValidationError):
            validator.validate(google_token(rsa_key), AUDIENCE)
