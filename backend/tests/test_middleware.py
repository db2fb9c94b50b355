"""
Hotel Listings API: Middleware Tests
======================================

What:  Request ID handling and the access log line.
How:   Requests go through the full app; access records are captured with
       pytest's caplog on the "hotel_api.access" logger.

What we test:
    ✅ Plain client request IDs are echoed; unsafe ones are replaced
    ✅ Access line carries the hotel id and the upload count
    ✅ /health and static upload fetches are not logged
    ✅ 500s from the catch-all handler still carry the request ID
"""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from hotel_api.middleware.logging import is_quiet_path
from hotel_api.middleware.request_id import accept_client_id, new_request_id

ACCESS_LOGGER = "hotel_api.access"


def access_records(caplog):
    return [record for record in caplog.records if record.name == ACCESS_LOGGER]


class TestRequestId:

    @pytest.mark.parametrize("value", ["abc123", "trace.42_A-b"])
    def test_plain_ids_accepted(self, value):
        assert accept_client_id(value)

    @pytest.mark.parametrize("value", ["", "has space", "abc\n", "x" * 65, "aéb"])
    def test_unsafe_ids_refused(self, value):
        assert not accept_client_id(value)

    def test_generated_id_is_short_hex(self):
        rid = new_request_id()
        assert len(rid) == 8
        int(rid, 16)

    @pytest.mark.asyncio
    async def test_unsafe_header_replaced(self, test_client):
        response = await test_client.get("/hotel/hotel-1", headers={"X-Request-ID": "forged id"})

        rid = response.headers["X-Request-ID"]
        assert rid != "forged id"
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_error_body_uses_same_id(self, test_client):
        response = await test_client.get("/hotel/nonexistent-hotel", headers={"X-Request-ID": "req-404"})

        assert response.json()["request_id"] == "req-404"
        assert response.headers["X-Request-ID"] == "req-404"

    @pytest.mark.asyncio
    async def test_unexpected_error_body_carries_id(self, test_client, monkeypatch):
        """The catch-all handler runs outside the request ID middleware."""
        from hotel_api.main import app
        from hotel_api.services.hotel_service import hotel_service

        async def explode(store, hotel_id):
            raise RuntimeError("boom")

        monkeypatch.setattr(hotel_service, "get_by_id", explode)

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/hotel/hotel-1", headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Something went wrong!"
        assert body["request_id"] == "req-500"


class TestAccessLog:

    @pytest.mark.parametrize(
        "path, quiet",
        [
            ("/health", True),
            ("/uploads", True),
            ("/uploads/1700000000000-a.jpg", True),
            ("/uploadsextra", False),
            ("/hotel/hotel-1", False),
            ("/images", False),
        ],
    )
    def test_quiet_paths(self, path, quiet):
        assert is_quiet_path(path) is quiet

    @pytest.mark.asyncio
    async def test_hotel_read_logs_hotel_id(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/hotel/hotel-1", headers={"X-Request-ID": "req-get"})

        [record] = access_records(caplog)
        assert record.levelno == logging.INFO
        assert record.hotel_id == "hotel-1"
        assert record.request_id == "req-get"
        assert "hotel=hotel-1" in record.getMessage()

    @pytest.mark.asyncio
    async def test_create_logs_assigned_id(self, test_client, caplog, valid_hotel_payload):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.post("/hotel", json=valid_hotel_payload)

        [record] = access_records(caplog)
        assert record.status == 201
        assert record.hotel_id == "hotel-2"

    @pytest.mark.asyncio
    async def test_upload_logs_file_count(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)
        files = [
            ("images", ("a.jpg", b"a", "image/jpeg")),
            ("images", ("b.jpg", b"b", "image/jpeg")),
        ]

        await test_client.post("/images", data={"hotelId": "hotel-1"}, files=files)

        [record] = access_records(caplog)
        assert record.hotel_id == "hotel-1"
        assert record.upload_count == 2
        assert "hotel=hotel-1 files=2" in record.getMessage()

    @pytest.mark.asyncio
    async def test_not_found_logged_as_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/hotel/nonexistent-hotel")

        [record] = access_records(caplog)
        assert record.levelno == logging.WARNING
        assert record.hotel_id == "nonexistent-hotel"

    @pytest.mark.asyncio
    async def test_health_and_static_fetches_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/health")
        await test_client.get("/uploads/1700000000000-missing.jpg")

        assert access_records(caplog) == []
