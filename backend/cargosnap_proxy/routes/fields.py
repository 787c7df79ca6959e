"""
CargoSnap Proxy — Field Route Handler
=======================================

What:  Handles POST /fields, setting name/value fields on a file.
How:   Validates the body (reference + non-empty field list) and forwards
       {"fields": [...]} to {base}/fields/{reference}, preserving field order.
"""

import logging
from typing import Any

from fastapi import APIRouter

from cargosnap_proxy.routes.files import ERROR_RESPONSES, require_identifier
from cargosnap_proxy.schemas.cargosnap import FieldSetRequest
from cargosnap_proxy.services.cargosnap_client import cargosnap_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Fields"])


@router.post(
    "/fields",
    responses=ERROR_RESPONSES,
    summary="Set fields on a file",
)
async def set_fields(body: FieldSetRequest) -> Any:
    segment = require_identifier(body.reference, field="reference")
    logger.info("Setting %d field(s) on reference %s", len(body.fields), body.reference)
    return await cargosnap_client.request(f"/fields/{segment}", "POST", body.to_upstream())
