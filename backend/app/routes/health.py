"""
Records API — Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Confirms the storage root exists and is writable; that is the only
       dependency a record request needs.

Status levels:
    - healthy:   storage root is a writable directory
    - unhealthy: storage root missing or not writable
"""

import logging
import os
import time

from fastapi import APIRouter, Depends

from app import __version__
from app.routes import get_record_service
from app.schemas.record import HealthResponse
from app.services.record_service import RecordService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    service: RecordService = Depends(get_record_service),
) -> HealthResponse:
    root = service.storage_root
    if root.is_dir() and os.access(root, os.W_OK):
        storage_status = "writable"
        overall = "healthy"
    else:
        storage_status = "unavailable"
        overall = "unhealthy"
        logger.warning("Health check: storage root %s is not writable", root)

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
