"""
Records API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for each failure the service reports.
How:   Each exception carries a client-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return `{"error": <message>}` with the matching HTTP status code.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    RecordsAPIError (base)
    ├── ValidationError          → 400 Bad Request (malformed id or body)
    ├── NotFoundError            → 404 Not Found
    ├── RecordEncodingError      → 500 Internal Server Error
    ├── FileStorageError         → 500 Internal Server Error
    ├── CorruptedRecordError     → 500 Internal Server Error
    └── SpecDocumentError        → 500 Internal Server Error

None of these are retried inside the service; the caller decides whether to
try again.
"""

from typing import Any, Dict, Optional


class RecordsAPIError(Exception):
    """
    Base exception for all Records API errors.

    Attributes:
        message:  Client-facing error string (returned as the `error` field)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RecordsAPIError):
    """
    Raised when client input fails validation.

    When:    Identifier in the URL is not a UUID; request body is not JSON.
    HTTP:    400 Bad Request

    Identifier validation runs before any storage access, so path-shaped
    input never reaches the filesystem layer.
    """

    def __init__(
        self,
        message: str = "invalid request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(RecordsAPIError):
    """
    Raised when a well-formed identifier has no record on disk.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "record",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class RecordEncodingError(RecordsAPIError):
    """
    Raised when a record cannot be serialized to its JSON file form.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "failed to encode record",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(RecordsAPIError):
    """
    Raised when file system operations fail.

    What:    Could not create the storage root, write, or read a record file.
    When:    Disk full, permission denied, path is a directory, I/O error.
    HTTP:    500 Internal Server Error

    The OS error and path go into `context` for the server log; the client
    only sees the fixed message.
    """

    def __init__(
        self,
        message: str = "file storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CorruptedRecordError(RecordsAPIError):
    """
    Raised when a record file exists but does not decode into a record.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "corrupted record data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SpecDocumentError(RecordsAPIError):
    """
    Raised when the static OpenAPI document cannot be read or parsed.

    Messages:
        "failed to read openapi specification" : missing/unreadable file
        "failed to parse yaml"                 : invalid YAML syntax
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "failed to read openapi specification",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
