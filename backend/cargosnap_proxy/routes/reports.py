"""
CargoSnap Proxy — Report Route Handler
========================================

What:  Handles POST /reports, asking CargoSnap to render a report for a set of files.
How:   Validates a non-empty `files` list and forwards only the fields the client
       sent (template, filename, async, settings are omitted when absent).
       Answers 201 Created with the upstream report descriptor.
"""

import logging
from typing import Any

from fastapi import APIRouter

from cargosnap_proxy.routes.files import ERROR_RESPONSES
from cargosnap_proxy.schemas.cargosnap import ReportRequest
from cargosnap_proxy.services.cargosnap_client import cargosnap_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reports"])


@router.post(
    "/reports",
    status_code=201,
    responses=ERROR_RESPONSES,
    summary="Generate a report",
)
async def create_report(body: ReportRequest) -> Any:
    logger.info("Requesting report for %d file(s)", len(body.files))
    return await cargosnap_client.request("/reports", "POST", body.to_upstream())
