"""
CargoSnap Proxy — Upload Route Handler
========================================

What:  Handles POST /uploads, attaching photos/documents to a file reference.
How:   Receives multipart/form-data, lets UploadService validate and read the
       attachments, then forwards one multipart request to {base}/uploads.
Who:   Called by inspection clients pushing pictures taken on site.

Request Flow:
    1. Client sends multipart/form-data with 'reference' and one or more 'files'
    2. UploadService rejects 0 or more than 10 files (400, nothing sent upstream)
    3. Each attachment keeps its original filename under the repeated 'files' field
    4. The upstream list of uploaded items is returned unchanged
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, File, Form, UploadFile

from cargosnap_proxy.routes.files import ERROR_RESPONSES
from cargosnap_proxy.schemas.cargosnap import REFERENCE_MAX_LENGTH
from cargosnap_proxy.services.cargosnap_client import cargosnap_client
from cargosnap_proxy.services.upload_service import upload_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])


@router.post(
    "/uploads",
    responses=ERROR_RESPONSES,
    summary="Upload attachments to a file",
    description="Uploads up to 10 attachments to the file identified by `reference`.",
)
async def upload_files(
    reference: str = Form(..., min_length=1, max_length=REFERENCE_MAX_LENGTH),
    files: Optional[List[UploadFile]] = File(default=None, description="Attachments (max 10)"),
    include_in_share: Optional[bool] = Form(default=None),
    location: Optional[str] = Form(default=None),
) -> Any:
    parts = await upload_service.build_parts(files)

    logger.info("Uploading %d attachment(s) to reference %s", len(parts), reference)

    data = {
        "reference": reference,
        "include_in_share": None if include_in_share is None else str(include_in_share).lower(),
        "location": location,
    }
    return await cargosnap_client.request("/uploads", "POST", data, files=parts)
