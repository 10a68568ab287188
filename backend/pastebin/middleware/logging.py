"""
Pastebin Backend — Request Logging Middleware
===============================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request ID and client address.
When:  Runs after RequestIDMiddleware so the request ID is available.

What we log vs what we DON'T log:
    Logged: method, path, status, duration, client address, request ID
    Not logged: request or response bodies (paste content)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pastebin.config import settings
from pastebin.middleware.rate_limit import client_address
from pastebin.middleware.request_id import request_id_var

logger = logging.getLogger("pastebin.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Level follows the status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
    Health checks are skipped (polled every few seconds by orchestrators).
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        client_ip = client_address(request, settings.trusted_proxies_list)
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
