"""
Records API — OpenAPI Document Service
=======================================

What:  Serves the static API description kept next to the application.
How:   Reads the YAML document from `openapi_spec_path` on every call; the
       JSON variant is the same document parsed with PyYAML's safe loader.
Who:   Called by the openapi routes.

The document is an external, read-only collaborator: the service never
writes it, and it lives outside the record storage root.
"""

import logging
import math
from pathlib import Path
from typing import Any

import aiofiles
import yaml
from fastapi.encoders import jsonable_encoder

from app.exceptions import SpecDocumentError

logger = logging.getLogger(__name__)


def _contains_non_finite(value: Any) -> bool:
    """True if a parsed document holds .nan or .inf, which JSON cannot carry."""
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_contains_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(_contains_non_finite(v) for v in value)
    return False


class OpenAPIService:
    """Reads and converts the static OpenAPI document."""

    def __init__(self, spec_path: str):
        self.spec_path = Path(spec_path)

    async def read_yaml(self) -> bytes:
        """
        Return the raw document bytes, unmodified.

        Raises:
            SpecDocumentError("failed to read openapi specification")
        """
        try:
            async with aiofiles.open(self.spec_path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.error("Failed to read OpenAPI document %s: %s", self.spec_path, str(e))
            raise SpecDocumentError(
                message="failed to read openapi specification",
                context={"path": str(self.spec_path), "os_error": str(e)},
            )

    async def read_as_json(self) -> Any:
        """
        Parse the document and return a JSON-compatible structure.

        Mappings, sequences and scalars carry over one to one. YAML-only
        scalar types (dates, timestamps) become ISO strings and non-string
        mapping keys become strings.

        Raises:
            SpecDocumentError("failed to read openapi specification")
            SpecDocumentError("failed to parse yaml")
        """
        content = await self.read_yaml()

        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as e:
            logger.error("Failed to parse OpenAPI document %s: %s", self.spec_path, str(e))
            raise SpecDocumentError(
                message="failed to parse yaml",
                context={"path": str(self.spec_path), "error": str(e)},
            )

        converted = jsonable_encoder(document)
        if _contains_non_finite(converted):
            logger.error("OpenAPI document %s holds non-finite numbers", self.spec_path)
            raise SpecDocumentError(
                message="failed to parse yaml",
                context={"path": str(self.spec_path), "error": "non-finite number"},
            )

        return converted
