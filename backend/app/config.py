"""
Records API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a default `settings` object.
Who:   Imported by `app.main`; the app factory also accepts an explicit
       `Settings` instance so tests can point at isolated storage roots.

Defaults: records under `./data` (relative to the working directory), the
OpenAPI document bundled with the package, listening on 0.0.0.0:8081.
"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

# Ships inside the package, so the default works from any working directory
BUNDLED_OPENAPI_DOCUMENT = Path(__file__).resolve().parent / "openapi.yaml"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Record Storage ────────────────────────────────────────────────────
    # What: Directory holding one `<uuid>.json` file per record
    # Created recursively at startup; relative paths resolve against the CWD
    storage_root: str = Field(
        default="./data",
        description="Root directory for persisted records",
    )

    # ── API Description ───────────────────────────────────────────────────
    # What: Static OpenAPI document served by /api/v1/openapi.{yaml,json}
    # Read-only; never written by the service and never under storage_root
    openapi_spec_path: str = Field(
        default=str(BUNDLED_OPENAPI_DOCUMENT),
        description="Path to the static OpenAPI YAML document",
    )

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8081, ge=1, le=65535)

    # What: Controls verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # STORAGE_ROOT and storage_root both work
    }


# Default instance, used when the app factory is not handed explicit settings
settings = Settings()
