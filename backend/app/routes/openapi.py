"""
Records API — OpenAPI Document Routes
======================================

What:  Republishes the static API description as YAML (verbatim) and JSON.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.routes import get_openapi_service
from app.schemas.record import ErrorResponse
from app.services.openapi_service import OpenAPIService

router = APIRouter(prefix="/api/v1", tags=["OpenAPI"])


@router.get(
    "/openapi.yaml",
    response_class=Response,
    responses={
        200: {"content": {"text/yaml": {}}, "description": "OpenAPI document"},
        500: {"description": "Document unreadable", "model": ErrorResponse},
    },
    summary="API description (YAML)",
)
async def get_openapi_yaml(
    service: OpenAPIService = Depends(get_openapi_service),
) -> Response:
    content = await service.read_yaml()
    return Response(content=content, media_type="text/yaml")


@router.get(
    "/openapi.json",
    responses={
        500: {"description": "Document unreadable or not valid YAML", "model": ErrorResponse},
    },
    summary="API description (JSON)",
)
async def get_openapi_json(
    service: OpenAPIService = Depends(get_openapi_service),
) -> JSONResponse:
    document = await service.read_as_json()
    return JSONResponse(content=document)
