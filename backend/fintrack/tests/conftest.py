"""
Shared fixtures: an isolated app on in-memory SQLite per test.
"""
import pytest
from fastapi.testclient import TestClient
from fintrack.core.config import Settings
from fintrack.main import create_app


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        BCRYPT_ROUNDS=4
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def register(client):
    """Register a user through the API and return the response body."""
    def _register(name="A", email="a@x.com", password="p"):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_headers(register):
    """Register a user and return bearer headers for them."""
    def _auth_headers(email="a@x.com", name="A"):
        token = register(name=name, email=email)["token"]
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def coffee():
    return {
        "description": "Coffee",
        "amount": 3.50,
        "category": "Food",
        "type": "expense",
        "date": "2024-01-05"
    }
