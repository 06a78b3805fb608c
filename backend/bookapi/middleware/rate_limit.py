"""
Book API - Rate Limiting Middleware
===================================

What:  Per-IP sliding window rate limiter.
How:   Keeps the timestamps of each client's recent requests in memory.
       On each request, timestamps older than the window are dropped; if the
       remaining count has reached the limit the request is answered with
       429 and a Retry-After header, otherwise it is recorded and passed on.

State lives in the middleware instance, so the limit holds per process.
Health checks and the API docs are never limited.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from bookapi.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Args:
        max_requests: Requests allowed per client IP within one window
        window_seconds: Window length in seconds
    """

    EXCLUDED_PATHS = {"/health"}
    EXCLUDED_PREFIXES = ("/swagger",)

    # Inactive IPs are purged after this many recorded requests
    CLEANUP_EVERY = 1000

    def __init__(self, app, max_requests: int = 100, window_seconds: int = 60, **kwargs):
        super().__init__(app, **kwargs)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    def is_excluded(self, path: str) -> bool:
        return path in self.EXCLUDED_PATHS or path.startswith(self.EXCLUDED_PREFIXES)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self.is_excluded(request.url.path):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"

        now = time.time()
        window_start = now - self.window_seconds

        # ── Sliding Window: Drop old entries ──────────────────────────────
        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        # ── Check rate limit ──────────────────────────────────────────────
        if len(timestamps) >= self.max_requests:
            # Seconds until the oldest request in the window expires
            retry_after = int(timestamps[0] + self.window_seconds - now) + 1
            exc = RateLimitExceededError(retry_after=retry_after)

            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                self.window_seconds,
            )

            return JSONResponse(
                status_code=429,
                content={"error": exc.message},
                headers={"Retry-After": str(exc.retry_after)},
            )

        # ── Record this request ───────────────────────────────────────────
        timestamps.append(now)
        self._recorded += 1
        if self._recorded % self.CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Remove IPs that have no requests within the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
