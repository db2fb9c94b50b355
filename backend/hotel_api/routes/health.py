"""
Hotel Listings API: Health Check Route
========================================

What:  Reports whether the service can handle requests end to end.
Who:   Container health checks, load balancers, monitoring.

Checks:
    record_store: the record file loads as a valid hotel collection
    uploads:      the upload directory exists

    healthy   → HTTP 200
    unhealthy → HTTP 503 (either check failed)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from hotel_api import __version__
from hotel_api.database import RecordStore, get_record_store
from hotel_api.schemas.hotel import HealthResponse
from hotel_api.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> HealthResponse:
    overall = "healthy"

    record_store_status = "readable"
    async with store.transaction():
        readable = await store.is_readable()
    if not readable:
        record_store_status = "unreadable"
        overall = "unhealthy"
        logger.warning("Health check: record file %s is unreadable", store.path)

    uploads_status = "available"
    if not file_service.uploads_dir.is_dir():
        uploads_status = "missing"
        overall = "unhealthy"
        logger.warning("Health check: upload directory %s is missing", file_service.uploads_dir)

    if overall != "healthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        record_store=record_store_status,
        uploads=uploads_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
