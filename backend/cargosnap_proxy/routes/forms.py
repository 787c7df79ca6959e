"""
CargoSnap Proxy — Form Route Handler
======================================

What:  Handles GET /forms/{id}, fetching a form definition with its submissions.
How:   The id must be numeric; a non-numeric id fails validation with 400
       before CargoSnap is contacted.
"""

from typing import Any, Optional

from fastapi import APIRouter, Query

from cargosnap_proxy.routes.files import ERROR_RESPONSES
from cargosnap_proxy.schemas.cargosnap import REFERENCE_MAX_LENGTH
from cargosnap_proxy.services.cargosnap_client import cargosnap_client

router = APIRouter(tags=["Forms"])


@router.get(
    "/forms/{form_id}",
    responses=ERROR_RESPONSES,
    summary="Get a form by id",
)
async def get_form(
    form_id: int,
    reference: Optional[str] = Query(default=None, max_length=REFERENCE_MAX_LENGTH),
    startdate: Optional[str] = Query(default=None),
    enddate: Optional[str] = Query(default=None),
    updated_startdate: Optional[str] = Query(default=None),
    updated_enddate: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1),
) -> Any:
    params = {
        "reference": reference,
        "startdate": startdate,
        "enddate": enddate,
        "updated_startdate": updated_startdate,
        "updated_enddate": updated_enddate,
        "limit": limit,
    }
    return await cargosnap_client.request(f"/forms/{form_id}", "GET", params)
