"""
CargoSnap Proxy — Upload Service
==================================

What:  Validates an attachment batch and turns it into outbound multipart parts.
How:   Checks the batch size (1..MAX_FILES_PER_UPLOAD) before touching any file,
       then hands each spooled file object to httpx under the repeated field name.
Who:   Called by the POST /uploads route handler.
When:  After FastAPI has parsed the inbound multipart body, before the upstream call.

Starlette spools each attachment to a temporary file while parsing the request.
The parts reference those files directly, so httpx streams them into the outbound
body chunk by chunk. Starlette closes them once the response has been sent.
"""

import logging
from typing import List, Optional

from fastapi import UploadFile

from cargosnap_proxy.exceptions import ValidationError
from cargosnap_proxy.services.cargosnap_client import FilePart

logger = logging.getLogger(__name__)

MAX_FILES_PER_UPLOAD = 10

# Field name repeated once per attachment in the outbound body
UPSTREAM_FILE_FIELD = "files"

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class UploadService:
    """Builds the multipart attachment list for a CargoSnap upload."""

    def __init__(self, max_files: int = MAX_FILES_PER_UPLOAD):
        self.max_files = max_files

    def validate_count(self, files: Optional[List[UploadFile]]) -> None:
        """
        Rejects empty or oversized batches.

        Raises:
            ValidationError: No attachment, or more than max_files attachments.
        """
        count = len(files or [])
        if count == 0:
            raise ValidationError(
                message="Nenhum arquivo enviado.",
                field="files",
            )
        if count > self.max_files:
            raise ValidationError(
                message=f"Máximo de {self.max_files} arquivos por envio.",
                field="files",
                context={"received": count},
            )

    async def build_parts(self, files: Optional[List[UploadFile]]) -> List[FilePart]:
        """
        Validate the batch and wrap every attachment as a multipart part.

        Returns:
            One (field, (filename, file, content_type)) tuple per attachment,
            in the order received, with the original filename preserved.
            The files stay open and are rewound to their start.
        """
        self.validate_count(files)

        parts: List[FilePart] = []
        for index, upload in enumerate(files):
            await upload.seek(0)
            filename = upload.filename or f"attachment-{index + 1}"
            parts.append(
                (
                    UPSTREAM_FILE_FIELD,
                    (filename, upload.file, upload.content_type or DEFAULT_CONTENT_TYPE),
                )
            )
            logger.debug("Prepared attachment %s (%s bytes)", filename, upload.size)

        return parts


upload_service = UploadService()
