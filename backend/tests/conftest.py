"""
Records API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── temp_storage: Storage root path inside tmp_path (not yet created)
    ├── openapi_document: Sample OpenAPI YAML written to tmp_path
    ├── app_settings: Settings pointing at the two paths above
    ├── record_service: Initialized RecordService over temp_storage
    ├── test_app: FastAPI app built from app_settings
    └── test_client: HTTPX AsyncClient talking to test_app, lifespan running
"""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any app import: app.main builds a default app at import time
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="records_api_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.record_service import RecordService  # noqa: E402


SAMPLE_OPENAPI_YAML = """\
openapi: 3.0.3
info:
  title: Sample API
  version: 1.0.0
  x-released: 2024-01-15
paths:
  /things:
    get:
      summary: List things
      tags: [things, read]
      deprecated: false
      responses:
        200:
          description: OK
        '404':
          description: Missing
x-limits:
  max_items: 10
  ratio: 0.5
  fallback: null
"""


@pytest.fixture
def temp_storage(tmp_path):
    """Storage root for one test; the app lifespan creates it."""
    return str(tmp_path / "data")


@pytest.fixture
def openapi_document(tmp_path):
    """Writes the sample OpenAPI document and returns its path."""
    path = tmp_path / "openapi.yaml"
    path.write_text(SAMPLE_OPENAPI_YAML, encoding="utf-8")
    return str(path)


@pytest.fixture
def app_settings(temp_storage, openapi_document):
    return Settings(
        storage_root=temp_storage,
        openapi_spec_path=openapi_document,
        log_level="WARNING",
    )


@pytest.fixture
def record_service(temp_storage):
    """A RecordService with its storage root already created."""
    service = RecordService(storage_root=temp_storage)
    service.initialize()
    return service


@pytest.fixture
def test_app(app_settings):
    return create_app(app_settings)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run lifespan events, so the fixture enters the
    app's lifespan itself; that is what creates the storage root.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
