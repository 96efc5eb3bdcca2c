"""
PawMart Backend — Request ID Middleware
=========================================

What:  Gives every request a short correlation ID and echoes it back in the
       X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID, otherwise generates one; stores
       it in a ContextVar so loggers and exception handlers can read it.
Who:   Applied to every request via Starlette middleware.

Why Request IDs matter:
    A 500 from a store failure carries the request ID in its body; support
    can search the server logs for it and find the driver error that the
    client never sees.

Unexpected errors:
    Anything the app's exception handlers don't cover would otherwise reach
    Starlette's ServerErrorMiddleware, which sits outside this middleware
    and never sees the request ID. It is caught here instead, so that 500
    carries the ID in both the body and the header.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def unexpected_error_response(rid: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again or contact support.",
            "request_id": rid,
        },
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if present
        2. Otherwise generate an 8-character ID from a UUID4
        3. Store in the ContextVar and on request.state
        4. Turn an unhandled exception into a generic 500
        5. Add the ID to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
            response = unexpected_error_response(rid)

        response.headers["X-Request-ID"] = rid
        return response
