"""
Records API — Request Logging Middleware
=========================================

What:  One access log line for every HTTP request.
How:   Measures the time spent in the rest of the stack and logs method, path,
       status, duration, trace id and client address.
When:  After TraceIDMiddleware (uses the trace id for correlation).

Logged vs not logged:
    ✅ Log: method, path, status, duration, client IP, trace ID
    ❌ Don't log: request bodies (record payloads are opaque caller data)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.trace_id import trace_id_var

logger = logging.getLogger("records_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Level by status class:
        5xx → ERROR
        4xx → WARNING
        2xx/3xx → INFO

    Health checks are skipped; probes hit /health every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        trace_id = trace_id_var.get("")

        if path == "/health":
            return await call_next(request)

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
            trace_id,
            client_ip,
            extra={
                "trace_id": trace_id,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
