"""
Journal Backend — Request ID Middleware
=======================================

What:  Assigns a short correlation ID to each request and echoes it back.
Why:   Every log line and error handler for one request can be tied together,
       and a client can quote the X-Request-ID header when reporting a problem.
How:   Accepts a client-sent X-Request-ID or generates one, stores it in a
       ContextVar (coroutine-local) and on request.state, and sets the
       response header.

Unexpected errors:
    Starlette answers unhandled exceptions from ServerErrorMiddleware, which
    sits outside this middleware and would drop the header. Anything that
    escapes the app is therefore logged and turned into the generic 500 here,
    so that response carries X-Request-ID too.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from journal.exceptions import GENERIC_SERVER_ERROR

logger = logging.getLogger(__name__)

# ContextVar, not threading.local: concurrent requests share one thread
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are plenty for correlation and readable in logs
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(e),
                exc_info=True,
            )
            response = JSONResponse(status_code=500, content={"error": GENERIC_SERVER_ERROR})

        response.headers["X-Request-ID"] = rid
        return response
