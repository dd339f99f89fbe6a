"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside an outer transaction on a shared connection to an
in-memory SQLite database. The session joins it through savepoints, so code
under test may commit, release and roll back freely while nothing leaks
between cases.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy.orm import scoped_session, sessionmaker

from authgate.api.deps import AUTH_SERVICE_KEY
from authgate.core.config import TestingConfig
from authgate.core.extensions import db as _db
from authgate.factory import create_app
from authgate.services.auth.wiring import build_auth_service


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - bcrypt runs at its minimum cost.
    - Avoids hitting external services (the Google validator is replaced).
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    TXN_MAX_RETRIES = 5
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(app, db, connection):
    """Provide a SQLAlchemy session wrapped in a per-test outer transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection. ``commit()`` inside
        the code under test only releases a savepoint; the outer transaction
        is rolled back after each test.
    """
    outer = connection.begin()
    scoped = scoped_session(
        sessionmaker(
            bind=connection,
            join_transaction_mode="create_savepoint",
            autoflush=False,
        )
    )

    # App code resolves ``db.session`` lazily, so swapping it is enough.
    original_session = db.session
    db.session = scoped

    ctx = app.app_context()
    ctx.push()
    try:
        yield scoped
    finally:
        ctx.pop()
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def identity_validator():
    """Scriptable stand-in for the Google ID token validator."""
    from tests.helpers.identity import FakeIdentityValidator

    return FakeIdentityValidator()


@pytest.fixture()
def auth_service(app, session, identity_validator):
    """Auth service wired from the test config, with the fake identity validator."""
    return build_auth_service(app.config, identity_validator=identity_validator)


@pytest.fixture()
def client(app, auth_service):
    """Flask test client whose API uses :func:`auth_service`."""
    app.extensions[AUTH_SERVICE_KEY] = auth_service
    try:
        yield app.test_client()
    finally:
        app.extensions.pop(AUTH_SERVICE_KEY, None)


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
