"""
Records API — Pydantic Record and Response Schemas
===================================================

What:  Pydantic models for the persisted record and the API responses.
How:   `StoredRecord` is both the on-disk document and the GET response body;
       the remaining models describe the other response shapes.

On-disk / wire form of a record:
    {
      "uuid": "3f0c6a2e-8a57-4c36-9d5e-0b7c1f6b2a41",
      "trace_id": "abc-123",
      "timestamp": "2024-01-15T12:00:00.123456Z",
      "payload": {"any": ["json", "value"]}
    }
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class StoredRecord(BaseModel):
    """
    What:  A single persisted record; immutable once written.
    Who:   Built by RecordService.create_record, returned by
           GET /api/v1/records/{uuid}.

    `payload` is opaque: any JSON value, including null, stored verbatim.
    """
    uuid: UUID = Field(description="Record identifier, assigned at creation")
    trace_id: str = Field(description="Caller-supplied X-Trace-ID or a generated UUID")
    timestamp: datetime = Field(description="Creation instant (UTC ISO 8601)")
    payload: Any = Field(description="Arbitrary JSON value supplied by the caller")


class CreateRecordResponse(BaseModel):
    """Returned by POST /api/v1/records with HTTP 201 Created."""
    status: str = Field(default="success")
    uuid: UUID = Field(description="Identifier of the new record")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failing endpoint.

    Example:
        {"error": "invalid uuid format"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and storage status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="Storage root status: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
