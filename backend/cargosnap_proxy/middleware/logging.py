"""
CargoSnap Proxy — Request Logging Middleware
==============================================

What:  One access-log line per proxied request.
How:   Times the request, then logs method, path, status, duration, request id and
       client IP on the `cargosnap_proxy.access` logger. The level follows the
       status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
When:  Inside RequestIDMiddleware, so the id is already set.

Request bodies are never logged: uploads carry inspection photos and field values
may hold customer data.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cargosnap_proxy.middleware.request_id import request_id_var

logger = logging.getLogger("cargosnap_proxy.access")

# Polled by process managers every few seconds
QUIET_PATHS = {"/status"}


def level_for_status(status: int) -> int:
    """Maps an HTTP status code to the log level of its access line."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
