"""
Pastebin Backend — Request ID Middleware
==========================================

What:  Assigns a short correlation ID to each request and echoes it back.
Why:   Every log line and error body of one request carries the same ID,
       so a user-reported error can be found in the server logs.
How:   Reuses a client-sent X-Request-ID, otherwise generates 8 characters
       of a UUID; stores it in a ContextVar and in request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach X-Request-ID to the request context and the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
