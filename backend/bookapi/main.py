"""
Book API - FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the app, its book store, middleware, exception
       handlers and routes; run() serves the module-level `app` with uvicorn.
Who:   uvicorn (`uvicorn bookapi.main:app`), the `bookapi` console script,
       `python -m bookapi`, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Rate Limit  │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────────────┐ ┌─────────────┐  │
    │  │  GET /   │ │ /books, /books/id│ │ GET /health │  │
    │  └──────────┘ └──────────────────┘ └─────────────┘  │
    │  Docs: /swagger/index.html, /swagger/doc.json       │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ BadBody→400 │ Validation→400 │ NotFound→404  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from bookapi import __version__
from bookapi.config import Settings, settings as default_settings
from bookapi.exceptions import NotFoundError, ValidationError, describe_validation_errors
from bookapi.middleware.logging import RequestLoggingMiddleware
from bookapi.middleware.rate_limit import RateLimitMiddleware
from bookapi.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from bookapi.models.book import SEED_BOOKS
from bookapi.routes import books, health, root
from bookapi.services.book_store import BookStore

logger = logging.getLogger(__name__)

DOCS_URL = "/swagger/index.html"
OPENAPI_URL = "/swagger/doc.json"
REDOC_URL = "/swagger/redoc"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # bookapi.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: configure logging and announce the service. Shutdown: log it."""
    app_settings: Settings = app.state.settings
    setup_logging(app_settings)
    app.state.started_at = time.time()

    logger.info("%s %s starting up with %d books", app_settings.app_name, __version__,
                app.state.book_store.count())
    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("API docs: http://%s:%d%s", app_settings.backend_host, app_settings.backend_port, DOCS_URL)

    yield

    # The book store is in memory only; its contents are discarded here
    logger.info("%s shutting down, %d books discarded", app_settings.app_name,
                app.state.book_store.count())


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Handler table:
        RequestValidationError  → 400 {"error": <decoder text>}
        ValidationError         → 400 {"error": message}
        NotFoundError           → 404 {"message": "Book not found"}
        Exception (fallback)    → 500 {"error": generic message}
    """

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError):
        """A request parameter could not be bound by the framework."""
        text = describe_validation_errors(exc.errors())
        logger.warning("[%s] Malformed request: %s", _request_id(request), text)
        return JSONResponse(status_code=400, content={"error": text})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic body for the client, full traceback in the log."""
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred"},
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use instead of the module-level singleton.

    Returns:
        A configured FastAPI instance with its own freshly seeded book store.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title=app_settings.app_name,
        description="A simple CRUD API built with Python and FastAPI",
        version=__version__,
        docs_url=DOCS_URL,
        redoc_url=REDOC_URL,
        openapi_url=OPENAPI_URL,
        swagger_ui_oauth2_redirect_url="/swagger/oauth2-redirect",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.book_store = BookStore(SEED_BOOKS if app_settings.seed_books else ())
    # Reset by the lifespan when served; set here for in-process clients
    app.state.started_at = time.time()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RateLimit → RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    if app_settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=app_settings.rate_limit_requests,
            window_seconds=app_settings.rate_limit_window,
        )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(books.router)
    app.include_router(health.router)

    return app


# uvicorn expects `bookapi.main:app` to be importable
app = create_app()


def run() -> None:
    """Serve the application on the configured host and port."""
    uvicorn.run(
        "bookapi.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
