"""
Records API — Record Storage Service
=====================================

What:  Creates, persists, and retrieves records in a one-file-per-record layout.
How:   Each record is pretty-printed JSON in `<storage_root>/<uuid>.json`.
       Writes land in a hidden temporary file first and are renamed into
       place, so a concurrent reader sees either no file or the whole record.
Who:   Called by the records routes; one instance per application, built
       from the app's Settings.

Directory Structure:
    data/
    ├── 3f0c6a2e-8a57-4c36-9d5e-0b7c1f6b2a41.json
    └── 9b1d2f44-0e61-4d1c-b0f5-6e2a7c3d8e90.json

Payload handling:
    The payload is opaque and may nest arbitrarily deep, so it never goes
    through pydantic's JSON reader or serializer (both cap nesting depth).
    Files are read and written with the json module; pydantic only validates
    and dumps the record's metadata fields.

Path safety:
    Lookups parse the identifier as a UUID before touching the filesystem and
    build the filename from the canonical form, so no raw user input ever
    becomes part of a path.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import UUID

import aiofiles
import aiofiles.os
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import (
    CorruptedRecordError,
    FileStorageError,
    NotFoundError,
    RecordEncodingError,
    ValidationError,
)
from app.schemas.record import StoredRecord

logger = logging.getLogger(__name__)

RECORD_EXTENSION = ".json"


def parse_record_id(raw_id: str) -> UUID:
    """
    Validate a path identifier.

    Returns: The parsed UUID.
    Raises:  ValidationError("invalid uuid format") for anything else.
    """
    try:
        return UUID(raw_id)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(
            message="invalid uuid format",
            field="uuid",
            context={"value": raw_id},
        )


def record_document(record: StoredRecord) -> Dict[str, Any]:
    """
    JSON-ready form of a record, used for the file and the GET response.

    Metadata is dumped by pydantic; the payload is passed through untouched.
    """
    document = record.model_dump(mode="json", exclude={"payload"})
    document["payload"] = record.payload
    return document


class RecordService:
    """
    Manages the record lifecycle on the filesystem.

    Lifecycle of a record:
        1. create_record() assigns a UUID4, resolves the trace id, stamps UTC time
        2. The record is serialized to indented JSON
        3. Bytes are written to `.<uuid>.json.<random>.tmp` in the storage root
        4. The temp file is renamed to `<uuid>.json` (atomic on POSIX)
        5. get_record() validates the id, checks existence, reads, decodes

    Records are never rewritten or deleted here, so no locking is needed:
    distinct records occupy distinct files.
    """

    def __init__(self, storage_root: str):
        """
        Args:
            storage_root: Directory for record files. Not created here;
                          call initialize() during startup.
        """
        self.storage_root = Path(storage_root).resolve()

    def initialize(self) -> None:
        """
        Create the storage root (recursively) if it does not exist.

        When:    Application startup, before the first request is served.
        Raises:  FileStorageError if the directory cannot be created.
        """
        try:
            self.storage_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create storage root %s: %s", self.storage_root, str(e))
            raise FileStorageError(
                message="failed to initialize data directory",
                context={"path": str(self.storage_root), "os_error": str(e)},
            )
        logger.info("Record storage initialized at %s", self.storage_root)

    def record_path(self, record_id: UUID) -> Path:
        """Storage location for a record: `<storage_root>/<uuid>.json`."""
        return self.storage_root / f"{record_id}{RECORD_EXTENSION}"

    def _encode(self, record: StoredRecord) -> str:
        return json.dumps(record_document(record), indent=2, ensure_ascii=False, allow_nan=False)

    async def create_record(self, payload: Any, trace_id: Optional[str] = None) -> StoredRecord:
        """
        Build a new record around `payload` and persist it.

        Args:
            payload:  Any JSON value; stored as-is.
            trace_id: Caller correlation id. Empty or None generates a fresh UUID4.

        Returns:
            The persisted StoredRecord.

        Raises:
            RecordEncodingError: Record could not be serialized.
            FileStorageError:    Record could not be written to disk.
        """
        record = StoredRecord(
            uuid=uuid.uuid4(),
            trace_id=trace_id or str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            payload=payload,
        )

        try:
            document = self._encode(record)
        except (ValueError, TypeError, RecursionError) as e:
            logger.error("Failed to encode record %s: %s", record.uuid, str(e))
            raise RecordEncodingError(context={"uuid": str(record.uuid), "error": str(e)})

        await self._write_atomic(record.uuid, document.encode("utf-8"))

        logger.info(
            "Record stored: %s (trace_id=%s, %d bytes)",
            record.uuid,
            record.trace_id,
            len(document),
        )
        return record

    async def _write_atomic(self, record_id: UUID, content: bytes) -> None:
        """
        Write `content` to the record's file via a temporary file + rename.

        Raises:
            FileStorageError("failed to save record") on any OS error. The
            temporary file is removed on failure.
        """
        final_path = self.record_path(record_id)
        temp_path = self.storage_root / f".{record_id}{RECORD_EXTENSION}.{uuid.uuid4().hex}.tmp"

        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(content)
                await f.flush()
            await aiofiles.os.replace(temp_path, final_path)
        except OSError as e:
            logger.error("Failed to save record at %s: %s", final_path, str(e))
            await self._cleanup_temp_file(temp_path)
            raise FileStorageError(
                message="failed to save record",
                context={"path": str(final_path), "os_error": str(e)},
            )

    async def _cleanup_temp_file(self, temp_path: Path) -> None:
        # Best effort: the original save error is what gets reported
        try:
            if await aiofiles.os.path.exists(temp_path):
                await aiofiles.os.remove(temp_path)
        except OSError as e:
            logger.warning("Failed to clean up temp file %s: %s", temp_path.name, str(e))

    async def get_record(self, raw_id: str) -> StoredRecord:
        """
        Look up a record by its identifier.

        Args:
            raw_id: Identifier exactly as taken from the URL path.

        Returns:
            The StoredRecord read from disk.

        Raises:
            ValidationError:      raw_id is not a UUID (no storage access happens)
            NotFoundError:        no file for this identifier
            FileStorageError:     file exists but could not be read
            CorruptedRecordError: file content is not a valid record
        """
        record_id = parse_record_id(raw_id)
        path = self.record_path(record_id)

        if not await aiofiles.os.path.exists(path):
            raise NotFoundError(resource="record", resource_id=str(record_id))

        try:
            async with aiofiles.open(path, "rb") as f:
                content = await f.read()
        except OSError as e:
            logger.error("Failed to read record %s: %s", path, str(e))
            raise FileStorageError(
                message="failed to read record",
                context={"path": str(path), "os_error": str(e)},
            )

        try:
            return StoredRecord.model_validate(json.loads(content))
        except PydanticValidationError as e:
            logger.error("Corrupted record file %s: %d validation errors", path, e.error_count())
            raise CorruptedRecordError(context={"path": str(path)})
        except (ValueError, RecursionError) as e:
            # Not JSON at all (or not UTF-8)
            logger.error("Corrupted record file %s: %s", path, str(e))
            raise CorruptedRecordError(context={"path": str(path)})
