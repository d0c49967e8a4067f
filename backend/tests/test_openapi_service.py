"""
Records API — OpenAPI Document Service Unit Tests
==================================================

What:  Tests for reading the static document and converting it to JSON.

What we test:
    ✅ Raw YAML bytes returned unchanged
    ✅ YAML → JSON keeps mappings, sequences and scalars
    ✅ Dates and non-string keys become JSON-compatible strings
    ✅ Missing document and invalid YAML raise the right errors
    ✅ The shipped openapi.yaml parses and documents every endpoint
"""

from pathlib import Path

import pytest

from app.config import BUNDLED_OPENAPI_DOCUMENT
from app.exceptions import SpecDocumentError
from app.services.openapi_service import OpenAPIService


class TestOpenAPIServiceYaml:

    @pytest.mark.asyncio
    async def test_read_yaml_is_byte_for_byte(self, openapi_document):
        service = OpenAPIService(spec_path=openapi_document)

        content = await service.read_yaml()

        assert content == Path(openapi_document).read_bytes()

    @pytest.mark.asyncio
    async def test_missing_document(self, tmp_path):
        service = OpenAPIService(spec_path=str(tmp_path / "missing.yaml"))

        with pytest.raises(SpecDocumentError, match="failed to read openapi specification"):
            await service.read_yaml()


class TestOpenAPIServiceJson:

    @pytest.mark.asyncio
    async def test_structure_is_preserved(self, openapi_document):
        service = OpenAPIService(spec_path=openapi_document)

        document = await service.read_as_json()

        assert document["openapi"] == "3.0.3"
        assert document["info"]["title"] == "Sample API"
        assert document["info"]["version"] == "1.0.0"
        operation = document["paths"]["/things"]["get"]
        assert operation["tags"] == ["things", "read"]
        assert operation["deprecated"] is False
        assert document["x-limits"] == {"max_items": 10, "ratio": 0.5, "fallback": None}

    @pytest.mark.asyncio
    async def test_yaml_dates_become_iso_strings(self, openapi_document):
        service = OpenAPIService(spec_path=openapi_document)

        document = await service.read_as_json()

        assert document["info"]["x-released"] == "2024-01-15"

    @pytest.mark.asyncio
    async def test_missing_document(self, tmp_path):
        service = OpenAPIService(spec_path=str(tmp_path / "missing.yaml"))

        with pytest.raises(SpecDocumentError, match="failed to read openapi specification"):
            await service.read_as_json()

    @pytest.mark.asyncio
    async def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("paths: [unclosed\n  - : :\n", encoding="utf-8")
        service = OpenAPIService(spec_path=str(path))

        with pytest.raises(SpecDocumentError, match="failed to parse yaml"):
            await service.read_as_json()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [".nan", ".inf", "-.inf"])
    async def test_non_finite_numbers_rejected(self, tmp_path, value):
        path = tmp_path / "non_finite.yaml"
        path.write_text(f"openapi: 3.0.3\nx-limits:\n  ratio: {value}\n", encoding="utf-8")
        service = OpenAPIService(spec_path=str(path))

        with pytest.raises(SpecDocumentError, match="failed to parse yaml"):
            await service.read_as_json()


class TestShippedDocument:
    """The document that ships with the service describes the real routes."""

    @pytest.mark.asyncio
    async def test_documents_every_endpoint(self):
        service = OpenAPIService(spec_path=str(BUNDLED_OPENAPI_DOCUMENT))

        document = await service.read_as_json()

        assert set(document["paths"]) == {
            "/api/v1/records",
            "/api/v1/records/{uuid}",
            "/api/v1/openapi.yaml",
            "/api/v1/openapi.json",
        }
        assert "post" in document["paths"]["/api/v1/records"]
        assert "get" in document["paths"]["/api/v1/records/{uuid}"]
