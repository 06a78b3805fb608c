"""
Book API - Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own application (and therefore its own freshly
       seeded book store) built from explicit Settings, so no test depends
       on the environment or on what another test created or deleted.

Fixtures:
    ├── settings_factory: make_settings, for per-class Settings overrides
    ├── test_settings: Settings with the rate limiter off and no .env file
    ├── app:           FastAPI app built by create_app(test_settings)
    ├── book_store:    The BookStore owned by `app`
    └── test_client:   HTTPX AsyncClient talking to `app` in-process
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from bookapi.config import Settings
from bookapi.main import create_app


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment's .env file."""
    values = {"rate_limit_enabled": False, "log_level": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory():
    """Builds isolated Settings; override `test_settings` with it to change one knob."""
    return make_settings


@pytest.fixture
def test_settings(settings_factory):
    return settings_factory()


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def book_store(app):
    return app.state.book_store


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/books")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
