"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from accounts.config import Settings
from accounts.database import Base, create_db_engine, create_session_factory, get_db
from accounts.main import create_app
from accounts.services.passwords import PasswordHasher
from accounts.services.sessions import SessionManager
from accounts.services.tokens import TokenIssuer
from accounts.services.users import UserRepository

TEST_PASSWORD = "testpass123"  # noqa: S105

SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

test_settings = Settings(
    database_url=SQLALCHEMY_DATABASE_URL,
    jwt_secret="test-secret",  # noqa: S106
    bcrypt_rounds=4,
    environment="test",
    _env_file=None,
)
engine = create_db_engine(test_settings)
TestingSessionLocal = create_session_factory(engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def settings() -> Settings:
    return test_settings


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=test_settings.bcrypt_rounds)


@pytest.fixture
def tokens() -> TokenIssuer:
    return TokenIssuer.from_settings(test_settings)


@pytest.fixture
def manager(db: Session, hasher, tokens) -> SessionManager:
    """Session manager over the test database session."""
    return SessionManager(UserRepository(db), hasher, tokens)


@pytest.fixture(scope="function")
def app(db):
    """Create an application with database override."""
    application = create_app(test_settings)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app):
    """Create a test client. Requests go over https so secure cookies round-trip."""
    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Register a user and return the response's user payload."""
    response = client.post(
        "/api/v1/users/register",
        json={"username": "testuser", "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 200
    return response.json()["user"]


@pytest.fixture
def auth_headers(client, registered_user):
    """Log the registered user in and return bearer auth headers."""
    response = client.post(
        "/api/v1/users/login",
        json={"username": registered_user["username"], "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    # Tests using headers should not also ride on the login cookie
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}
