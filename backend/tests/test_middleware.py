"""
Book API - Middleware, Health and Docs Tests
============================================

What we test:
    ✅ X-Request-ID is generated, or echoed when the client sends one
    ✅ Rate limiter is off unless enabled
    ✅ Rate limiter answers 429 with Retry-After once the limit is reached
    ✅ /health and /swagger are exempt from rate limiting
    ✅ Health report reflects the book store
    ✅ Generated API docs are served under /swagger
"""

import time

import pytest

from bookapi import __version__
from bookapi.config import Settings
from bookapi.main import create_app
from bookapi.middleware.rate_limit import RateLimitMiddleware


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/books")
        rid = response.headers.get("X-Request-ID")
        assert rid
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_client_id_echoed(self, test_client):
        response = await test_client.get("/books/99", headers={"X-Request-ID": "abc-123"})
        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "abc-123"


class TestRateLimit:
    """Rate limiting with a tiny budget."""

    @pytest.fixture
    def test_settings(self, settings_factory):
        return settings_factory(
            rate_limit_enabled=True, rate_limit_requests=3, rate_limit_window=60
        )

    @pytest.mark.asyncio
    async def test_rejects_over_limit(self, test_client):
        for _ in range(3):
            assert (await test_client.get("/books")).status_code == 200

        response = await test_client.get("/books")

        assert response.status_code == 429
        assert "Rate limit exceeded" in response.json()["error"]
        assert 1 <= int(response.headers["Retry-After"]) <= 61

    @pytest.mark.asyncio
    async def test_rejected_request_does_not_reach_store(self, test_client, book_store):
        for _ in range(3):
            await test_client.get("/")

        response = await test_client.post("/books", json={"title": "X", "author": "Y"})

        assert response.status_code == 429
        assert book_store.count() == 2

    @pytest.mark.asyncio
    async def test_health_and_docs_exempt(self, test_client):
        for _ in range(5):
            assert (await test_client.get("/health")).status_code == 200
            assert (await test_client.get("/swagger/doc.json")).status_code == 200
        assert (await test_client.get("/books")).status_code == 200

    def test_excluded_paths(self):
        limiter = RateLimitMiddleware(app=None)
        assert limiter.is_excluded("/health")
        assert limiter.is_excluded("/swagger/index.html")
        assert not limiter.is_excluded("/books")
        assert not limiter.is_excluded("/")


class TestRateLimitDefault:
    """Without RATE_LIMIT_ENABLED the service never answers 429."""

    @pytest.fixture
    def test_settings(self, monkeypatch):
        monkeypatch.delenv("RATE_LIMIT_ENABLED", raising=False)
        return Settings(_env_file=None, log_level="WARNING")

    def test_default_app_has_no_limiter(self, app):
        assert RateLimitMiddleware not in [m.cls for m in app.user_middleware]

    @pytest.mark.asyncio
    async def test_many_requests_allowed(self, test_client):
        for _ in range(150):
            assert (await test_client.get("/books")).status_code == 200


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_report(self, test_client):
        await test_client.post("/books", json={"title": "X", "author": "Y"})

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == __version__
        assert body["book_count"] == 3
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_uptime_counts_from_app_start(self, app, test_client):
        app.state.started_at = time.time() - 100

        body = (await test_client.get("/health")).json()

        assert 100 <= body["uptime_seconds"] < 200

    def test_each_app_has_own_start_time(self):
        before = time.time()
        app = create_app(Settings(_env_file=None, log_level="WARNING"))
        assert app.state.started_at >= before


class TestDocs:

    @pytest.mark.asyncio
    async def test_openapi_document(self, test_client):
        response = await test_client.get("/swagger/doc.json")
        assert response.status_code == 200
        doc = response.json()
        assert doc["info"]["title"] == "Book API"
        assert set(doc["paths"]) >= {"/", "/books", "/books/{book_id}"}
        assert set(doc["paths"]["/books/{book_id}"]) == {"get", "put", "delete"}
        assert doc["paths"]["/books"]["post"]["summary"] == "Create a new book"
        for path, method in (("/books", "post"), ("/books/{book_id}", "put")):
            body = doc["paths"][path][method]["requestBody"]
            assert body["required"] is True
            assert "title" in body["content"]["application/json"]["schema"]["properties"]

    @pytest.mark.asyncio
    async def test_swagger_ui(self, test_client):
        response = await test_client.get("/swagger/index.html")
        assert response.status_code == 200
        assert "swagger-ui" in response.text
        assert "/swagger/doc.json" in response.text

    @pytest.mark.asyncio
    async def test_redoc(self, test_client):
        response = await test_client.get("/swagger/redoc")
        assert response.status_code == 200
