"""
Shared pytest fixtures for the payment recorder test suite.

- Well-known test identities (alice, bob, charlie)
- In-memory SQLite engine and sessions
- FastAPI TestClient wired to the test database and a recording sink
"""
import os

# Must be set before the app modules read their configuration
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["LEDGER_DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_session, init_db
from dependencies import create_access_token, get_notification_sink
from main import app
from services.identity import Identity
from services.notifications import RecordingSink


# ============================================================================
# IDENTITY FIXTURES
# ============================================================================


@pytest.fixture
def alice() -> Identity:
    return Identity(bytes([0xA1]) * 32)


@pytest.fixture
def bob() -> Identity:
    return Identity(bytes([0xB0]) * 32)


@pytest.fixture
def charlie() -> Identity:
    return Identity(bytes([0xC4]) * 32)


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every session of one test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ============================================================================
# API FIXTURES
# ============================================================================


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def client(session_factory, sink) -> Generator[TestClient, None, None]:
    """TestClient whose ledger writes to the test database and recording sink."""

    def override_get_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_notification_sink] = lambda: sink
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build Authorization headers for an identity."""

    def _headers(identity: Identity) -> dict:
        return {"Authorization": f"Bearer {create_access_token(identity)}"}

    return _headers
