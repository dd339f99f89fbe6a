"""Unit tests for federated (Google) sign-in."""

from __future__ import annotations

import pytest
from authgate.services import ResourceNotFoundError
from authgate.services._shared.errors import InvalidIDTokenError
from authgate.services.identity.dto import UserRegisterIn

CLIENT_ID = "authgate-test.apps.googleusercontent.com"


@pytest.fixture()
def grace(auth_service):
    return auth_service.register(
        UserRegisterIn(username="grace", email="grace@example.com", password="cobol-1959")
    )


class TestFederatedIdentityVerifier:
    def test_known_email_gets_a_token_pair(self, auth_service, identity_validator, grace):
        identity_validator.accept("google-token", email="grace@example.com")

        pair = auth_service.validate_federated_token("google-token")

        assert auth_service.verify_token(pair.access_token).id == grace.id

    def test_empty_audience_falls_back_to_configured_client_id(
        self, auth_service, identity_validator, grace
    ):
        identity_validator.accept("google-token", email="grace@example.com")

        auth_service.validate_federated_token("google-token")
        auth_service.validate_federated_token("google-token", "another-client")

        assert identity_validator.calls == [
            ("google-token", CLIENT_ID),
            ("google-token", "another-client"),
        ]

    def test_invalid_id_token(self, auth_service):
        with pytest.raises(InvalidIDTokenError) as info:
            auth_service.validate_federated_token("forged")
        assert info.value.code == "invalid_id_token"

    def test_identity_without_email_is_invalid(self, auth_service, identity_validator):
        identity_validator.accept("no-email", email=None)
        with pytest.raises(InvalidIDTokenError):
            auth_service.validate_federated_token("no-email")

    def test_unverified_email_is_invalid(self, auth_service, identity_validator, grace):
        identity_validator.accept("unverified", email="grace@example.com", email_verified=False)

        with pytest.raises(InvalidIDTokenError, match="not verified"):
            auth_service.validate_federated_token("unverified")

    def test_unregistered_email_is_not_found(self, auth_service, identity_validator):
        identity_validator.accept("stranger", email="stranger@example.com")

        with pytest.raises(ResourceNotFoundError, match="email=stranger@example.com"):
            auth_service.validate_federated_token("stranger")
