import pytest
from fastapi.testclient import TestClient

from devconnector.core.config import Settings
from devconnector.main import create_app


@pytest.fixture(scope="function")
def settings():
    """Settings backed by an in-memory SQLite database."""
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture(scope="function")
def app(settings):
    app = create_app(settings)
    try:
        yield app
    finally:
        app.state.engine.dispose()


@pytest.fixture(scope="function")
def client(app):
    """Client with the lifespan running, so tables exist."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register(client):
    """Register a user and return its token."""

    def _register(name="Alice", email="alice@mail.com", password="secret123"):
        response = client.post("/api/users", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        return response.json()["token"]

    return _register