"""
CargoSnap Proxy — File Route Handlers
=======================================

What:  Create, list, fetch, close and delete CargoSnap files.
How:   Each handler validates its input, forwards one call through the upstream
       client and returns the upstream payload. Upstream failures propagate as
       UpstreamError and are mapped by the global handlers in main.py.

Route Inventory:
    POST   /files               → POST   {base}/files
    GET    /files               → GET    {base}/files
    GET    /files/{id}          → GET    {base}/files/{id}
    PATCH  /files/{id}/close    → PATCH  {base}/files/{id}/close
    DELETE /files/{id}/delete   → DELETE {base}/files/{id}
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

from fastapi import APIRouter, Query

from cargosnap_proxy.exceptions import NotFoundError, ValidationError
from cargosnap_proxy.schemas.cargosnap import (
    DeleteResponse,
    ErrorResponse,
    FileCreateRequest,
    REFERENCE_MAX_LENGTH,
)
from cargosnap_proxy.services.cargosnap_client import cargosnap_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files"])

ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    500: {"description": "CargoSnap API error", "model": ErrorResponse},
}


def require_identifier(value: Optional[str], field: str = "id") -> str:
    """
    Returns the identifier URL-quoted for use as a path segment.

    Raises:
        ValidationError: The identifier is missing or blank.
    """
    if value is None or not value.strip():
        raise ValidationError(message=f"O parâmetro '{field}' é obrigatório.", field=field)
    return quote(value, safe="")


@router.post(
    "/files",
    responses=ERROR_RESPONSES,
    summary="Create a file reference",
)
async def create_file(body: FileCreateRequest) -> Any:
    """Registers a new file under the client's reference (optionally closed right away)."""
    logger.info("Creating file reference %s", body.reference)
    return await cargosnap_client.request("/files", "POST", body.to_upstream())


@router.get(
    "/files",
    responses=ERROR_RESPONSES,
    summary="List files",
    description="Lists files, optionally filtered by reference, search term and date ranges.",
)
async def list_files(
    reference: Optional[str] = Query(default=None, max_length=REFERENCE_MAX_LENGTH),
    search: Optional[str] = Query(default=None, description="Free text search"),
    startdate: Optional[str] = Query(default=None, description="Created on or after (YYYY-MM-DD)"),
    enddate: Optional[str] = Query(default=None, description="Created on or before (YYYY-MM-DD)"),
    updated_startdate: Optional[str] = Query(default=None, description="Updated on or after"),
    updated_enddate: Optional[str] = Query(default=None, description="Updated on or before"),
    limit: Optional[int] = Query(default=None, ge=1),
    include: Optional[str] = Query(default=None, description="Comma-separated related data to embed"),
    field_id: Optional[int] = Query(default=None, description="Only files carrying this field"),
) -> Any:
    params = {
        "reference": reference,
        "search": search,
        "startdate": startdate,
        "enddate": enddate,
        "updated_startdate": updated_startdate,
        "updated_enddate": updated_enddate,
        "limit": limit,
        "include": include,
        "field_id": field_id,
    }
    return await cargosnap_client.request("/files", "GET", params)


@router.get(
    "/files/{file_id}",
    responses=ERROR_RESPONSES,
    summary="Get a file by id",
)
async def get_file(file_id: str) -> Any:
    segment = require_identifier(file_id)
    return await cargosnap_client.request(f"/files/{segment}", "GET")


@router.patch(
    "/files/{file_id}/close",
    responses=ERROR_RESPONSES,
    summary="Close a file",
    description="Closing an already closed file is not an error; the upstream record is returned as-is.",
)
async def close_file(file_id: str) -> Any:
    segment = require_identifier(file_id)
    logger.info("Closing file %s", file_id)
    return await cargosnap_client.request(f"/files/{segment}/close", "PATCH")


@router.delete(
    "/files/{file_id}/delete",
    response_model=DeleteResponse,
    responses={
        **ERROR_RESPONSES,
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Delete a file",
)
async def delete_file(file_id: str) -> DeleteResponse:
    """
    Deletes a file upstream.

    CargoSnap answers a delete of an unknown file with an empty body rather than
    an error status, so an empty payload is reported as 404.
    """
    segment = require_identifier(file_id)
    data = await cargosnap_client.request(f"/files/{segment}", "DELETE")
    if not data:
        raise NotFoundError(resource="Arquivo", resource_id=file_id)

    logger.info("Deleted file %s", file_id)
    return DeleteResponse(message="Arquivo excluído com sucesso.", file=data)
