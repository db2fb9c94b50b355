"""
Hotel Listings API: File Service Unit Tests
=============================================

What:  Tests for storing uploaded bytes and building their public URLs.
How:   Uses a temporary upload directory per test.

Test Strategy:
    ✅ Stored name is <millis>-<original base name>
    ✅ Directory parts of client filenames are stripped
    ✅ Public URL is absolute and contains the original filename
    ✅ resolve() refuses paths outside the upload directory
    ✅ Write failures surface as UploadError
"""

import re
from unittest.mock import patch

import pytest

from hotel_api.exceptions import UploadError
from hotel_api.services.file_service import DEFAULT_UPLOAD_NAME, FileService


class TestNaming:

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("photo.jpg", "photo.jpg"),
            ("../../etc/passwd", "passwd"),
            ("C:\\Users\\me\\lobby.png", "lobby.png"),
            ("", DEFAULT_UPLOAD_NAME),
            (None, DEFAULT_UPLOAD_NAME),
            ("..", DEFAULT_UPLOAD_NAME),
        ],
    )
    def test_safe_basename(self, filename, expected):
        assert FileService.safe_basename(filename) == expected

    def test_storage_name_is_timestamp_prefixed(self, file_service):
        name = file_service.generate_storage_name("pool.jpg")
        assert re.fullmatch(r"\d{13}-pool\.jpg", name)

    def test_public_url(self, file_service):
        assert file_service.public_url("1700000000000-pool.jpg") == (
            "http://localhost:3000/uploads/1700000000000-pool.jpg"
        )

    def test_public_url_escapes_spaces(self, file_service):
        assert file_service.public_url("1-my photo.jpg").endswith("/1-my%20photo.jpg")


class TestResolve:

    def test_inside_upload_dir(self, file_service, upload_dir):
        assert file_service.resolve("a.jpg") == (upload_dir / "a.jpg").resolve()

    def test_traversal_rejected(self, file_service):
        with pytest.raises(ValueError):
            file_service.resolve("../database.json")


class TestStoreUpload:

    @pytest.mark.asyncio
    async def test_writes_bytes(self, file_service, upload_dir, sample_image_bytes):
        storage_name, url = await file_service.store_upload("test.jpg", sample_image_bytes)

        assert (upload_dir / storage_name).read_bytes() == sample_image_bytes
        assert url.startswith("http://localhost:3000/uploads/")
        assert url.endswith("-test.jpg")

    @pytest.mark.asyncio
    async def test_traversal_name_stays_in_upload_dir(self, file_service, upload_dir):
        storage_name, _ = await file_service.store_upload("../escape.jpg", b"x")

        assert (upload_dir / storage_name).exists()
        assert not (upload_dir.parent / "escape.jpg").exists()

    @pytest.mark.asyncio
    async def test_write_failure_raises_upload_error(self, file_service):
        with patch("hotel_api.services.file_service.aiofiles.open", side_effect=OSError("disk full")):
            with pytest.raises(UploadError) as exc_info:
                await file_service.store_upload("test.jpg", b"x")
        assert exc_info.value.message == "Error uploading images"
