"""
Records API — Trace ID Middleware
==================================

What:  Resolves a trace identifier for each incoming request and echoes it
       in the response.
How:   Takes the client's X-Trace-ID header when present and non-empty,
       otherwise generates a UUID4. The value is stored in a ContextVar (for
       loggers) and on request.state (for route handlers), and returned in
       the X-Trace-ID response header.
Who:   Applied to every request; POST /api/v1/records stamps the resolved
       value into the new record's `trace_id`.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

TRACE_HEADER = "X-Trace-ID"

# Coroutine-local: concurrent requests on one event loop each see their own value
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")


def resolve_trace_id(header_value: str | None) -> str:
    """Header value if non-empty, else a fresh UUID4 string."""
    if header_value:
        return header_value
    return str(uuid.uuid4())


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a trace ID to each request.

    Behavior:
        1. Read X-Trace-ID from the request
        2. If empty or absent: generate a UUID4
        3. Store in ContextVar and request.state.trace_id
        4. Add to response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER))

        trace_id_var.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)

        response.headers[TRACE_HEADER] = trace_id
        return response
