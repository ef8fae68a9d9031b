"""
Tests for authentication endpoints.
"""
from fintrack.core.security import verify_token


def test_register(client, settings):
    """Test user registration returns a token and the public user."""
    response = client.post(
        "/api/auth/register",
        json={"name": "A", "email": "a@x.com", "password": "p"}
    )
    assert response.status_code == 201
    body = response.json()
    assert set(body["user"]) == {"id", "name", "email"}
    assert body["user"]["email"] == "a@x.com"
    claims = verify_token(body["token"], settings)
    assert claims.id == body["user"]["id"]
    assert claims.email == "a@x.com"


def test_register_missing_fields(client):
    """Test registration rejects empty fields."""
    for payload in (
        {"name": "", "email": "a@x.com", "password": "p"},
        {"name": "A", "email": "a@x.com"},
        {"name": "A", "email": "   ", "password": "p"},
        {},
    ):
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert "error" in response.json()


def test_register_duplicate_email(client, register):
    """Test a second registration with the same email conflicts."""
    register(name="A", email="a@x.com", password="p")
    response = client.post(
        "/api/auth/register",
        json={"name": "Someone else", "email": "a@x.com", "password": "other"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "User already exists"}


def test_email_is_case_sensitive(client, register):
    """Test emails differing only in case are distinct accounts."""
    register(email="a@x.com")
    response = client.post(
        "/api/auth/register",
        json={"name": "B", "email": "A@x.com", "password": "p"}
    )
    assert response.status_code == 201


def test_login(client, register, settings):
    """Test user login."""
    registered = register(email="a@x.com", password="secret")
    response = client.post(
        "/api/auth/login",
        json={"email": "a@x.com", "password": "secret"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["user"] == registered["user"]
    assert verify_token(body["token"], settings).id == registered["user"]["id"]


def test_login_invalid_credentials(client, register):
    """Test wrong password and unknown email get the same answer."""
    register(email="a@x.com", password="secret")
    wrong_password = client.post(
        "/api/auth/login",
        json={"email": "a@x.com", "password": "nope"}
    )
    unknown_email = client.post(
        "/api/auth/login",
        json={"email": "ghost@x.com", "password": "secret"}
    )
    assert wrong_password.status_code == 400
    assert unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"email": "a@x.com"})
    assert response.status_code == 400


def test_me(client, auth_headers):
    """Test the current user endpoint reads identity from the token."""
    headers = auth_headers(email="me@x.com", name="Me")
    response = client.get("/api/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Me"
    assert "password_hash" not in response.json()


def test_missing_token(client):
    """Test protected routes answer 401 without a token."""
    for method, path in (
        ("get", "/api/transactions"),
        ("post", "/api/transactions"),
        ("put", "/api/transactions/1"),
        ("delete", "/api/transactions/1"),
        ("get", "/api/analytics"),
    ):
        response = getattr(client, method)(path)
        assert response.status_code == 401, path
        assert response.json() == {"error": "Access denied. No token provided."}


def test_invalid_token(client):
    """Test a garbage token is forbidden."""
    response = client.get(
        "/api/transactions",
        headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Invalid or expired token."}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert "timestamp" in response.json()


def test_categories(client):
    response = client.get("/api/categories")
    assert response.status_code == 200
    assert "Food" in response.json()


def test_register_oversized_name(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "n" * 256, "email": "a@x.com", "password": "p"}
    )
    assert response.status_code == 400
