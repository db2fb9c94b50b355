"""
Hotel Listings API: Image Service Unit Tests
==============================================

What:  Tests for attaching uploaded images to a hotel.
How:   Real RecordStore on a temp file; the module-level file_service is
       patched to the per-test upload directory.

What we test:
    ✅ Attaching one file grows images by one with a well-formed URL
    ✅ Several files are appended in upload order
    ✅ Unknown hotel → NotFoundError, hotels unchanged, files left on disk
    ✅ Missing hotel id behaves like an unknown hotel
"""

from urllib.parse import urlparse

import pytest

from hotel_api.exceptions import NotFoundError
from hotel_api.services import image_service as image_service_module
from hotel_api.services.image_service import ImageService, UploadedImage


@pytest.fixture(autouse=True)
def patched_file_service(monkeypatch, file_service):
    monkeypatch.setattr(image_service_module, "file_service", file_service)
    return file_service


class TestAttach:

    def setup_method(self):
        self.service = ImageService()

    @pytest.mark.asyncio
    async def test_attach_single_file(self, record_store, sample_image_bytes, read_records):
        before = (await record_store.load_all())[0].images

        images = await self.service.attach(
            record_store, "hotel-1", [UploadedImage("test.jpg", sample_image_bytes)]
        )

        assert len(images) == len(before) + 1
        new_url = images[-1]
        parsed = urlparse(new_url)
        assert parsed.scheme == "http"
        assert parsed.netloc == "localhost:3000"
        assert parsed.path.startswith("/uploads/")
        assert "test.jpg" in new_url
        assert read_records()[0]["images"] == images

    @pytest.mark.asyncio
    async def test_attach_keeps_upload_order(self, record_store):
        files = [UploadedImage("a.jpg", b"a"), UploadedImage("b.jpg", b"b")]

        images = await self.service.attach(record_store, "hotel-1", files)

        assert images[0] == "/uploads/test.jpg"
        assert images[1].endswith("-a.jpg")
        assert images[2].endswith("-b.jpg")

    @pytest.mark.asyncio
    async def test_attach_no_files_returns_existing(self, record_store):
        images = await self.service.attach(record_store, "hotel-1", [])
        assert images == ["/uploads/test.jpg"]

    @pytest.mark.asyncio
    async def test_unknown_hotel(self, record_store, record_file, upload_dir, sample_image_bytes):
        before = record_file.read_text(encoding="utf-8")

        with pytest.raises(NotFoundError, match="Hotel not found"):
            await self.service.attach(
                record_store, "nonexistent-hotel", [UploadedImage("test.jpg", sample_image_bytes)]
            )

        assert record_file.read_text(encoding="utf-8") == before
        # Bytes were written before the lookup and are not cleaned up
        assert len(list(upload_dir.iterdir())) == 1

    @pytest.mark.asyncio
    async def test_missing_hotel_id(self, record_store):
        with pytest.raises(NotFoundError):
            await self.service.attach(record_store, None, [UploadedImage("test.jpg", b"x")])
