"""
CargoSnap Proxy — Upload Service Unit Tests
=============================================

What:  Tests for attachment batch validation and multipart part building.
How:   Builds real UploadFile objects over in-memory buffers (no HTTP involved).
"""

import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from cargosnap_proxy.exceptions import ValidationError
from cargosnap_proxy.services.upload_service import (
    MAX_FILES_PER_UPLOAD,
    UPSTREAM_FILE_FIELD,
    UploadService,
)


def make_upload(content: bytes, filename, content_type=None) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(file=io.BytesIO(content), filename=filename, headers=headers)


class TestBatchValidation:
    """Tests for the 1..10 attachment bounds."""

    def setup_method(self):
        self.service = UploadService()

    def test_no_files_rejected(self):
        with pytest.raises(ValidationError, match="Nenhum arquivo"):
            self.service.validate_count([])

    def test_none_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.validate_count(None)
        assert exc_info.value.field == "files"

    def test_single_file_accepted(self):
        self.service.validate_count([MagicMock()])

    def test_limit_accepted(self):
        self.service.validate_count([MagicMock() for _ in range(MAX_FILES_PER_UPLOAD)])

    def test_over_limit_rejected(self):
        with pytest.raises(ValidationError, match="Máximo de 10"):
            self.service.validate_count([MagicMock() for _ in range(MAX_FILES_PER_UPLOAD + 1)])

    @pytest.mark.asyncio
    async def test_oversized_batch_is_not_read(self):
        """Validation happens before any attachment content is touched."""
        uploads = [MagicMock(read=AsyncMock(), seek=AsyncMock()) for _ in range(11)]

        with pytest.raises(ValidationError):
            await self.service.build_parts(uploads)

        for upload in uploads:
            upload.read.assert_not_awaited()
            upload.seek.assert_not_awaited()


class TestBuildParts:
    """Tests for turning UploadFiles into multipart parts."""

    def setup_method(self):
        self.service = UploadService()

    @pytest.mark.asyncio
    async def test_preserves_order_filename_and_type(self):
        front = make_upload(b"first", "container-front.jpg", "image/jpeg")
        seal = make_upload(b"%PDF-1.4", "seal.pdf", "application/pdf")

        parts = await self.service.build_parts([front, seal])

        assert parts == [
            (UPSTREAM_FILE_FIELD, ("container-front.jpg", front.file, "image/jpeg")),
            (UPSTREAM_FILE_FIELD, ("seal.pdf", seal.file, "application/pdf")),
        ]

    @pytest.mark.asyncio
    async def test_attachments_are_not_read_into_memory(self):
        """Parts carry the open spooled files, rewound, for httpx to stream."""
        upload = make_upload(b"container photo", "front.jpg", "image/jpeg")
        upload.file.seek(0, io.SEEK_END)

        parts = await self.service.build_parts([upload])

        part_file = parts[0][1][1]
        assert part_file is upload.file
        assert not part_file.closed
        assert part_file.tell() == 0
        assert part_file.read() == b"container photo"

    @pytest.mark.asyncio
    async def test_missing_content_type_defaults_to_octet_stream(self):
        parts = await self.service.build_parts([make_upload(b"raw", "blob.bin")])

        assert parts[0][1][2] == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_missing_filename_gets_positional_name(self):
        parts = await self.service.build_parts(
            [make_upload(b"a", "a.jpg", "image/jpeg"), make_upload(b"b", None, "image/jpeg")]
        )

        assert parts[1][1][0] == "attachment-2"

    @pytest.mark.asyncio
    async def test_custom_limit(self):
        service = UploadService(max_files=1)
        with pytest.raises(ValidationError, match="Máximo de 1 "):
            await service.build_parts(
                [make_upload(b"a", "a.jpg"), make_upload(b"b", "b.jpg")]
            )
