"""
Hotel Listings API: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── valid_hotel_payload: A request body that passes validation
    ├── existing_hotel_record: The record seeded into every test store
    ├── record_file / record_store: Temp record file holding hotel-1, and its store
    ├── read_records: Parses the record file as it is now
    ├── upload_dir / file_service: Temporary upload directory and its service
    ├── sample_image_bytes: Fake image content for upload tests
    └── test_client: HTTPX AsyncClient with the record store overridden
"""

import copy
import json
import os
import tempfile

# Point settings at throwaway locations BEFORE any hotel_api import
_TEST_ROOT = tempfile.mkdtemp(prefix="hotel_api_test_")
os.environ["DATABASE_FILE"] = os.path.join(_TEST_ROOT, "database.json")
os.environ["UPLOADS_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["PUBLIC_BASE_URL"] = "http://localhost:3000"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from hotel_api.database import RecordStore, get_record_store  # noqa: E402
from hotel_api.services.file_service import FileService  # noqa: E402

VALID_HOTEL_PAYLOAD = {
    "title": "Test Hotel",
    "description": "Test Description",
    "guestCount": 4,
    "bedroomCount": 2,
    "bathroomCount": 1,
    "amenities": ["Wifi", "Pool"],
    "hostInfo": "John Doe",
    "address": "123 Test St",
    "latitude": 45.123,
    "longitude": -93.123,
    "rooms": [
        {
            "roomSlug": "test-room",
            "roomImage": "test.jpg",
            "roomTitle": "Test Room",
            "bedroomCount": 1,
        }
    ],
}

EXISTING_HOTEL_RECORD = {
    "hotelId": "hotel-1",
    "slug": "existing-hotel",
    "images": ["/uploads/test.jpg"],
    "title": "Existing Hotel",
    "description": "Existing Description",
    "guestCount": 4,
    "bedroomCount": 2,
    "bathroomCount": 1,
    "amenities": ["Wifi", "Pool"],
    "hostInfo": "John Doe",
    "address": "123 Existing St",
    "latitude": 45.123,
    "longitude": -93.123,
    "rooms": [
        {
            "roomSlug": "existing-room",
            "roomImage": "existing.jpg",
            "roomTitle": "Existing Room",
            "bedroomCount": 1,
        }
    ],
}


@pytest.fixture
def valid_hotel_payload():
    """A deep copy each time, so tests can mutate it freely."""
    return copy.deepcopy(VALID_HOTEL_PAYLOAD)


@pytest.fixture
def existing_hotel_record():
    return copy.deepcopy(EXISTING_HOTEL_RECORD)


@pytest.fixture
def record_file(tmp_path, existing_hotel_record):
    """A record file seeded with hotel-1."""
    path = tmp_path / "database.json"
    path.write_text(json.dumps([existing_hotel_record], indent=2), encoding="utf-8")
    return path


@pytest.fixture
def record_store(record_file):
    return RecordStore(str(record_file))


@pytest.fixture
def upload_dir(tmp_path):
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def file_service(upload_dir):
    return FileService(str(upload_dir), base_url="http://localhost:3000/uploads")


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def read_records(record_file):
    """Returns a callable that parses the seeded record file's current content."""

    def _read():
        return json.loads(record_file.read_text(encoding="utf-8"))

    return _read


@pytest_asyncio.fixture
async def test_client(record_store, file_service, monkeypatch):
    """
    HTTPX AsyncClient talking to the app in-process.

    The record store dependency is overridden with the seeded temp store and
    image uploads are written to the per-test upload directory.
    """
    from hotel_api.main import app
    from hotel_api.routes import uploads
    from hotel_api.services import image_service

    monkeypatch.setattr(image_service, "file_service", file_service)
    monkeypatch.setattr(uploads, "file_service", file_service)
    app.dependency_overrides[get_record_store] = lambda: record_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
