"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


def env_list(name: str, default: str) -> tuple[str, ...]:
    """Split a comma-separated environment variable into a lowercase tuple."""
    raw = os.getenv(name, default)
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        Symmetric key signing session tokens. Encoded to bytes and validated
        (at least 32 bytes) once, when the auth service is wired.
    JWT_ISSUER: str
        ``iss`` claim stamped on and required from every session token.
    JWT_ACCESS_TOKEN_EXPIRES: datetime.timedelta
        Access token lifetime (60 minutes).
    JWT_REFRESH_TOKEN_EXPIRES: datetime.timedelta
        Refresh token lifetime (24 hours).
    BCRYPT_ROUNDS: int
        bcrypt cost factor used when hashing new passwords.
    TXN_MAX_RETRIES: int
        Default retry bound for the transaction executor; ``0`` is unbounded.
    GOOGLE_CLIENT_ID: str
        Default audience for federated Google ID tokens.
    GOOGLE_CERTS_URL: str
        JWKS endpoint publishing Google's signing keys.
    TOKEN_LOCATIONS: tuple[str, ...]
        Where inbound session tokens are looked up, in priority order among
        ``headers``, ``cookies`` and ``query``.
    TOKEN_COOKIE_NAME: str
        Cookie carrying the session token.
    TOKEN_QUERY_PARAM: str
        Query parameter carrying the session token (only when ``query`` is in
        ``TOKEN_LOCATIONS``).
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT_SIGNING_KEY_32_BYTES_MIN")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "authgate")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("JWT_ACCESS_TOKEN_MINUTES", 60))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(hours=env_int("JWT_REFRESH_TOKEN_HOURS", 24))
    BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 15)

    # Inbound token resolution
    TOKEN_LOCATIONS = env_list("TOKEN_LOCATIONS", "headers,cookies")
    TOKEN_COOKIE_NAME = os.getenv("TOKEN_COOKIE_NAME", "jwt")
    TOKEN_QUERY_PARAM = os.getenv("TOKEN_QUERY_PARAM", "jwt")

    # Federated identity
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CERTS_URL = os.getenv(
        "GOOGLE_CERTS_URL", "https://www.googleapis.com/oauth2/v3/certs"
    )

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    TXN_MAX_RETRIES = env_int("TXN_MAX_RETRIES", 50)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Drops the bcrypt cost to the library minimum so suites stay fast.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    JWT_SECRET_KEY = "testing-signing-key-0123456789abcdef"
    GOOGLE_CLIENT_ID = "authgate-test.apps.googleusercontent.com"
    BCRYPT_ROUNDS = 4
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
