"""
Book API - Health Check Route
=============================

What:  Health check endpoint for monitoring and load balancer probes.
How:   The service has no external dependencies, so it is healthy whenever
       it can answer; the report adds the current size of the book store.
Who:   Called by container health checks and monitoring systems.
"""

import logging
import time

from fastapi import APIRouter, Depends, Request

from bookapi import __version__
from bookapi.dependencies import get_book_store
from bookapi.schemas.book import HealthResponse
from bookapi.services.book_store import BookStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and the number of stored books.",
)
async def health_check(
    request: Request,
    store: BookStore = Depends(get_book_store),
) -> HealthResponse:
    """Uptime counts from app.state.started_at, set when the application starts."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        book_count=store.count(),
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
