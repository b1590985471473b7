"""
Snippetbox Backend — Request Logging Middleware
=================================================

What:  One access log line for every HTTP request.
How:   Measures time around the downstream app and logs method, path,
       status, duration, request ID and client IP on `snippetbox.access`.
When:  Inside RequestIDMiddleware (uses its request ID for correlation).

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Not logged: request bodies (passwords), cookies, /health probes and
/static assets.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snippetbox.middleware.request_id import request_id_var

logger = logging.getLogger("snippetbox.access")

SKIPPED_PREFIXES = ("/health", "/static/")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path.startswith(SKIPPED_PREFIXES):
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
