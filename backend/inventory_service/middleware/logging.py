"""
Inventory Service — Request Logging Middleware
================================================

What:  One access log line per API request.
How:   Measures the time spent in the rest of the stack and logs method,
       path (with query string), status, response size, duration and
       request id on the `inventory_service.access` logger.

Not logged:
    - /health probes
    - the static form pages and the OpenAPI/docs pages
    - request bodies and uploaded file contents

Log level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from inventory_service.middleware.request_id import request_id_var

logger = logging.getLogger("inventory_service.access")

QUIET_PATHS = frozenset({
    "/health",
    "/RegisterForm.html",
    "/SearchForm.html",
    "/docs",
    "/redoc",
    "/openapi.json",
})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each API request/response pair."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        size = response.headers.get("content-length", "-")
        rid = request_id_var.get("")

        logger.log(
            level_for_status(response.status_code),
            "[%s] %s %s -> %d (%s bytes) in %.1fms",
            rid,
            request.method,
            target,
            response.status_code,
            size,
            elapsed_ms,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
