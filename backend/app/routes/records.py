"""
Records API — Record Route Handlers
====================================

What:  Handles POST /api/v1/records (create) and GET /api/v1/records/{uuid}.
How:   Parses the request, delegates to RecordService, returns JSON.

The request body is read raw and decoded with the json module, since a
record payload may be any JSON value (including a bare `null` or number),
not just an object.
"""

import json
import logging
import math
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.exceptions import ValidationError
from app.routes import get_record_service
from app.schemas.record import CreateRecordResponse, ErrorResponse, StoredRecord
from app.services.record_service import RecordService, record_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Records"])


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity by default; they are not valid JSON
    raise ValueError(f"invalid JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    # 1e400 parses to inf, which JSON cannot represent
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def decode_payload(body: bytes) -> Any:
    """
    Decode a request body into a JSON value.

    Raises:
        ValidationError("invalid JSON payload") for empty, non-UTF-8 or
        syntactically invalid bodies, and for numbers outside the float range.
    """
    try:
        return json.loads(body, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except (ValueError, RecursionError) as e:
        raise ValidationError(
            message="invalid JSON payload",
            field="body",
            context={"error": str(e)},
        )


@router.post(
    "/records",
    status_code=201,
    response_model=CreateRecordResponse,
    responses={
        400: {"description": "Body is not valid JSON", "model": ErrorResponse},
        500: {"description": "Record could not be encoded or saved", "model": ErrorResponse},
    },
    summary="Store an arbitrary JSON payload as a new record",
)
async def create_record(
    request: Request,
    service: RecordService = Depends(get_record_service),
) -> CreateRecordResponse:
    """
    Create a record from the request body.

    The trace id comes from TraceIDMiddleware: the client's X-Trace-ID
    header when set, otherwise a generated UUID.
    """
    payload = decode_payload(await request.body())
    trace_id = getattr(request.state, "trace_id", None)

    record = await service.create_record(payload, trace_id=trace_id)

    return CreateRecordResponse(status="success", uuid=record.uuid)


@router.get(
    "/records/{record_id}",
    response_model=StoredRecord,
    responses={
        400: {"description": "Identifier is not a UUID", "model": ErrorResponse},
        404: {"description": "Record not found", "model": ErrorResponse},
        500: {"description": "Record unreadable or corrupted", "model": ErrorResponse},
    },
    summary="Fetch a record by its identifier",
)
async def get_record(
    record_id: str,
    service: RecordService = Depends(get_record_service),
) -> JSONResponse:
    # record_id stays a plain str so malformed ids get our 400 body, not a 422
    record = await service.get_record(record_id)
    return JSONResponse(content=record_document(record))
