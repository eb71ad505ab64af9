"""
ASGI middleware for request logging and HTTP metrics.
Records request count, duration and errors, and writes one access log
line per request.
"""
import logging
import re
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from app.utils.logging import log_http_request
from app.utils.metrics import http_requests_total, http_request_duration_seconds, errors_total

logger = logging.getLogger("app.access")

UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE
)
NUMERIC_ID_RE = re.compile(r"/\d+(?=/|$)")


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests and track HTTP metrics for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Process request, log it and record metrics."""
        start_time = time.time()

        # Skip metrics endpoint to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method

        try:
            response = await call_next(request)
        except Exception:
            errors_total.labels(error_type="exception").inc()
            raise

        status_code = response.status_code
        duration = time.time() - start_time
        path = self._normalize_path(request.url.path)

        http_requests_total.labels(
            method=method,
            path=path,
            status=status_code
        ).inc()
        http_request_duration_seconds.labels(
            method=method,
            path=path
        ).observe(duration)

        # Track errors (4xx and 5xx)
        if status_code >= 400:
            errors_total.labels(error_type=f"{status_code // 100}xx").inc()

        log_http_request(
            logger,
            method=method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=duration * 1000,
        )
        return response

    def _normalize_path(self, path: str) -> str:
        """
        Normalize path to reduce cardinality.
        Replaces UUIDs and numeric IDs with placeholders.
        """
        path = UUID_RE.sub('{id}', path)

        # Numeric IDs at the end of path segments
        return NUMERIC_ID_RE.sub('/{id}', path)
