"""
Request middleware for logging, timing, and request ID tracking.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from studyhall.core.logging import bind_request_context, get_logger

logger = get_logger(__name__)

# Polled by probes and scrapers; not worth a log line each
QUIET_PATHS = {"/health", "/metrics"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds a request ID (reusing an incoming X-Request-ID) to the structlog
    context and logs method, path, status code and duration. Client errors
    are logged at warning level, so rejected bookings stand out.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        bind_request_context(request_id=request_id, method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.error("request_failed", error=str(e), duration_ms=duration_ms)
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        if request.url.path not in QUIET_PATHS:
            log = logger.warning if 400 <= response.status_code < 500 else logger.info
            log("request_completed", status_code=response.status_code, duration_ms=duration_ms)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response
