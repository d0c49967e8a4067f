"""
Records API — API Routes Package
=================================

Route Inventory:
    - records.py:  POST /api/v1/records          (create a record)
                   GET  /api/v1/records/{uuid}   (fetch a record)
    - openapi.py:  GET  /api/v1/openapi.yaml     (static API description)
                   GET  /api/v1/openapi.json     (same, converted to JSON)
    - health.py:   GET  /health                  (service health check)

Routes are thin: they pull data out of the request, call a service, and pick
the status code. Failures are raised as application exceptions and rendered
by the global handlers in app.main.
"""

from fastapi import Request

from app.services.openapi_service import OpenAPIService
from app.services.record_service import RecordService


def get_record_service(request: Request) -> RecordService:
    """Dependency: the RecordService built by create_app()."""
    return request.app.state.record_service


def get_openapi_service(request: Request) -> OpenAPIService:
    """Dependency: the OpenAPIService built by create_app()."""
    return request.app.state.openapi_service
