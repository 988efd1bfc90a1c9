"""
Info API — Request Logging Middleware
======================================

What:  One access-log line per HTTP request on the `info_api.access` logger.
How:   Measures wall time around the downstream handler and picks the level
       from the status class:

           5xx → ERROR    4xx → WARNING    otherwise → INFO

       Structured fields (method, path, status, duration_ms, client_ip) are
       attached via `extra` for JSON formatters.

Not logged: request and response bodies.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from info_api.middleware.request_id import request_id_var

logger = logging.getLogger("info_api.access")

# Probed every few seconds by orchestrators
SKIPPED_PATHS = {"/management/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
