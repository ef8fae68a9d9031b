"""
Tests for application-wide behaviour: error pages and request concurrency.
"""
import asyncio
import time
import httpx
from fastapi.testclient import TestClient
from fintrack.core.config import Settings
from fintrack.main import create_app
from fintrack.services import credential_service, transaction_service


def test_debug_mode_keeps_errors_generic(monkeypatch):
    """Test DEBUG never turns a server error into a traceback page."""
    app = create_app(Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        BCRYPT_ROUNDS=4,
        DEBUG=True
    ))

    def explode(db, user_id):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(transaction_service, "list_transactions", explode)
    with TestClient(app, raise_server_exceptions=False) as client:
        token = client.post(
            "/api/auth/register",
            json={"name": "A", "email": "a@x.com", "password": "p"}
        ).json()["token"]
        response = client.get(
            "/api/transactions",
            headers={"Authorization": f"Bearer {token}"}
        )
    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}
    assert "Traceback" not in response.text
    assert "secret internals" not in response.text


def test_slow_hashing_does_not_block_other_requests(app, client, monkeypatch):
    """Test a request stuck in password hashing leaves the server responsive."""
    real_hash = credential_service.get_password_hash

    def slow_hash(password, rounds=10):
        time.sleep(0.5)
        return real_hash(password, rounds=rounds)

    monkeypatch.setattr(credential_service, "get_password_hash", slow_hash)
    finished = []

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            async def register():
                response = await http.post(
                    "/api/auth/register",
                    json={"name": "A", "email": "a@x.com", "password": "p"}
                )
                finished.append(("register", response.status_code))

            async def health():
                await asyncio.sleep(0.05)
                response = await http.get("/api/health")
                finished.append(("health", response.status_code))

            await asyncio.gather(register(), health())

    asyncio.run(run())
    assert finished == [("health", 200), ("register", 201)]
