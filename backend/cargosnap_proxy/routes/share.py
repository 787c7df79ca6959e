"""
CargoSnap Proxy — Share Route Handler
=======================================

What:  Handles GET /share, creating a public share link for a file.
How:   Reads the share options from the query string and forwards them to
       {base}/share. The upstream answer (share URL + expiry) is returned as-is.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Query

from cargosnap_proxy.routes.files import ERROR_RESPONSES
from cargosnap_proxy.schemas.cargosnap import REFERENCE_MAX_LENGTH
from cargosnap_proxy.services.cargosnap_client import cargosnap_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Share"])


@router.get(
    "/share",
    responses=ERROR_RESPONSES,
    summary="Create a share link",
)
async def create_share(
    reference: str = Query(..., min_length=1, max_length=REFERENCE_MAX_LENGTH),
    expires: Optional[datetime] = Query(default=None, description="Link expiry (ISO 8601)"),
    lang: Optional[str] = Query(default=None, description="Language of the share page"),
    direct_download: Optional[bool] = Query(default=None),
    email: Optional[str] = Query(default=None, description="Address to notify"),
    send_email: Optional[bool] = Query(default=None, description="Mail the link to `email`"),
) -> Any:
    params = {
        "reference": reference,
        "expires": expires.isoformat() if expires else None,
        "lang": lang,
        "direct_download": direct_download,
        "email": email,
        "send_email": send_email,
    }
    logger.info("Creating share link for reference %s", reference)
    return await cargosnap_client.request("/share", "GET", params)
