"""Pytest configuration and fixtures for the storefront.

HTTP tests build the app with create_app() against the in-memory store and
identity backends, run its lifespan, and talk to it over ASGITransport.
"""

import os

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# storefront.main builds a module-level app on import; keep it off the network.
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("IDENTITY_BACKEND", "memory")

from storefront.core.config import Settings, get_settings  # noqa: E402
from storefront.main import create_app  # noqa: E402
from tests.helpers import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    DEMO_ADMIN_EMAIL,
    DEMO_ADMIN_PASSWORD,
)


@pytest.fixture
def memory_settings(tmp_path) -> Settings:
    """Settings for the in-memory backends, ignoring any .env file."""
    return Settings(
        _env_file=None,
        store_backend="memory",
        identity_backend="memory",
        local_store_path=str(tmp_path / "local_store.json"),
    )


@pytest.fixture
def app(tmp_path, monkeypatch) -> FastAPI:
    """FastAPI app on the in-memory backends with a per-test local store file."""
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("IDENTITY_BACKEND", "memory")
    monkeypatch.setenv("LOCAL_STORE_PATH", str(tmp_path / "local_store.json"))
    monkeypatch.setenv("TELEMETRY_ENABLED", "false")
    get_settings.cache_clear()
    application = create_app()
    yield application
    get_settings.cache_clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the app (ASGI), with startup and shutdown run."""
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


async def _login(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    """Bearer headers for the admin account."""
    return await _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
async def demo_headers(client: AsyncClient) -> dict[str, str]:
    """Bearer headers for the demo admin account."""
    return await _login(client, DEMO_ADMIN_EMAIL, DEMO_ADMIN_PASSWORD)


@pytest.fixture
async def user_headers(client: AsyncClient) -> dict[str, str]:
    """Sign up a regular user and return its bearer headers."""
    response = await client.post(
        "/api/v1/auth/signup",
        json={"email": "jane@example.com", "password": "secret-pass", "display_name": "Jane"},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
