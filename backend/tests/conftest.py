"""
Shared fixtures for the Taskboard test suite.

Every test runs against a fresh in-memory SQLite database that the
FastAPI app is pointed at through a dependency override.
"""

import os

# Must be set before taskboard.config is imported
os.environ.setdefault("TASKBOARD_DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from taskboard.database import Base, get_db
from taskboard.models.user import User
from taskboard.models.todo import Todo  # noqa: F401
from taskboard.core import security


# Test database setup
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Database session bound to the test database."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """FastAPI test client using the test database."""
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db, username="alice", email="alice@x.com", password="secret1", is_active=True):
    """Insert a user directly, bypassing the auth service."""
    user = User(
        username=username,
        email=email,
        password_hash=security.get_password_hash(password),
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def alice(db_session):
    return _make_user(db_session)


@pytest.fixture
def bob(db_session):
    return _make_user(db_session, username="bob", email="bob@y.org", password="hunter22")


@pytest.fixture
def test_engine():
    """Engine behind the test database."""
    return engine


@pytest.fixture
def make_user(db_session):
    """Factory inserting users directly into the test database."""
    def factory(**kwargs):
        return _make_user(db_session, **kwargs)
    return factory


@pytest.fixture
def register_user(client):
    """Factory registering users through the API; returns the parsed response."""
    def factory(username="alice", email="alice@x.com", password="secret1"):
        response = client.post(
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return factory


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice_headers(register_user):
    """Authorization headers for a freshly registered alice."""
    return bearer(register_user()["access_token"])


@pytest.fixture
def bob_headers(register_user):
    """Authorization headers for a freshly registered bob."""
    return bearer(register_user(username="bob", email="bob@y.org", password="hunter22")["access_token"])
