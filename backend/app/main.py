"""
Records API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       whose services are built from the given Settings.
Who:   uvicorn (`uvicorn app.main:app`) or the `records-api` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐               │
    │  │  Trace ID    │→│  Logging        │               │
    │  └──────────────┘ └─────────────────┘               │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌──────────────────┐ ┌────────┐ │
    │  │ /api/v1/records│ │ /api/v1/openapi.*│ │/health │ │
    │  └────────────────┘ └──────────────────┘ └────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the storage root (abort startup if that fails)
    3. Log startup complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings as default_settings
from app.exceptions import (
    CorruptedRecordError,
    FileStorageError,
    NotFoundError,
    RecordEncodingError,
    SpecDocumentError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.trace_id import TraceIDMiddleware, trace_id_var
from app.routes import health, openapi, records
from app.services.openapi_service import OpenAPIService
from app.services.record_service import RecordService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # Override any existing logging config
    )

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Create storage root; a failure aborts startup (uvicorn exits nonzero)
        3. Log successful startup
    """
    app_settings: Settings = app.state.settings
    record_service: RecordService = app.state.record_service

    setup_logging(app_settings.log_level)
    logger.info("Records API %s starting up...", __version__)

    try:
        record_service.initialize()
    except FileStorageError as e:
        logger.error("failed to initialize data directory: %s", e.context.get("os_error", e.message))
        raise

    logger.info("API description: %s", app.state.openapi_service.spec_path)
    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("Records API shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to status codes and `{"error": ...}` bodies.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        NotFoundError           → 404 Not Found
        RecordEncodingError     → 500
        FileStorageError        → 500
        CorruptedRecordError    → 500
        SpecDocumentError       → 500
        HTTPException           → framework status (unknown route, bad method)
        Exception (fallback)    → 500 "internal server error"

    Server-side details (paths, OS errors) go to the log through the
    exception context, never into the response.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", trace_id_var.get(""), exc.message)
        return _error(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(RecordEncodingError)
    async def handle_encoding_error(request: Request, exc: RecordEncodingError):
        logger.error("[%s] Encoding error: %s | Context: %s", trace_id_var.get(""), exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("[%s] File storage error: %s | Context: %s", trace_id_var.get(""), exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(CorruptedRecordError)
    async def handle_corrupted_record(request: Request, exc: CorruptedRecordError):
        logger.error("[%s] Corrupted record: %s", trace_id_var.get(""), exc.context)
        return _error(500, exc.message)

    @app.exception_handler(SpecDocumentError)
    async def handle_spec_document_error(request: Request, exc: SpecDocumentError):
        logger.error("[%s] OpenAPI document error: %s | Context: %s", trace_id_var.get(""), exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace is logged, the client gets a generic 500."""
        logger.error(
            "[%s] Unexpected error: %s",
            trace_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error(500, "internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Configuration for this instance. Defaults to the
                      environment-derived `app.config.settings`.

    Returns: Fully configured FastAPI instance ready to receive requests.

    FastAPI's generated /openapi.json and docs UIs are disabled: the service
    publishes its own static description under /api/v1/.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Records API",
        description="Stores arbitrary JSON payloads as immutable, UUID-addressed records.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.record_service = RecordService(storage_root=app_settings.storage_root)
    app.state.openapi_service = OpenAPIService(spec_path=app_settings.openapi_spec_path)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: TraceID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(TraceIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(records.router)
    app.include_router(openapi.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `app.main:app` to be importable
app = create_app()


def main() -> None:
    """
    Console entry point (`records-api`).

    Prepares the storage root before binding the socket; if that fails the
    process exits with status 1 and nothing is served.
    """
    setup_logging(default_settings.log_level)

    try:
        app.state.record_service.initialize()
    except FileStorageError as e:
        logger.critical("failed to initialize data directory: %s", e.context.get("os_error", e.message))
        sys.exit(1)

    logger.info("Server starting on %s:%d...", default_settings.backend_host, default_settings.backend_port)
    uvicorn.run(
        app,
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
