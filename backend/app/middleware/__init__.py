"""
Records API — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Trace ID] → [Logging] → Route Handler

    1. Trace ID: Resolve the correlation id (header or generated)
    2. Logging: Log method, path, status and duration with that id

    Responses pass back through in reverse, so the access log sees the final
    status code and the trace id header is set on every response.
"""
