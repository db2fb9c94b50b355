"""
Hotel Listings API: Hotel Route Handlers
==========================================

What:  POST /hotel (create), GET /hotel/{hotelId} (read), PUT /hotel/{hotelId} (replace).
How:   Validate the raw JSON body, delegate to HotelService, return the hotel.

Why `Any` bodies:
    The body is taken as untyped JSON so the validator, not FastAPI's schema
    coercion, decides what is missing or mistyped. Validation and not-found
    errors are raised as exceptions and formatted by the global handlers.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from hotel_api.database import RecordStore, get_record_store
from hotel_api.schemas.hotel import ErrorResponse, Hotel
from hotel_api.services.hotel_service import hotel_service
from hotel_api.services.validator import validate_hotel_patch, validate_hotel_payload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Hotels"])

_HOTEL_BODY = Body(
    default=None,
    description=(
        "Every hotel field: title, description, guestCount, bedroomCount, bathroomCount, "
        "amenities, hostInfo, address, latitude, longitude, rooms."
    ),
)


@router.post(
    "/hotel",
    status_code=201,
    response_model=Hotel,
    responses={
        201: {"description": "Hotel created", "model": Hotel},
        400: {"description": "Missing fields, invalid types or invalid rooms", "model": ErrorResponse},
    },
    summary="Create a hotel",
)
async def create_hotel(
    request: Request,
    payload: Any = _HOTEL_BODY,
    store: RecordStore = Depends(get_record_store),
) -> Hotel:
    """
    Create a hotel. `hotelId`, `slug` and `images` are assigned by the server;
    values for them in the body are ignored.
    """
    data = validate_hotel_payload(payload)
    hotel = await hotel_service.create(store, data)
    request.state.hotel_id = hotel.hotel_id
    return hotel


@router.get(
    "/hotel/{hotel_id}",
    response_model=Hotel,
    responses={
        200: {"description": "Hotel details", "model": Hotel},
        404: {"description": "Hotel not found", "model": ErrorResponse},
    },
    summary="Get a hotel by ID",
)
async def get_hotel(
    request: Request,
    hotel_id: str,
    store: RecordStore = Depends(get_record_store),
) -> Hotel:
    request.state.hotel_id = hotel_id
    return await hotel_service.get_by_id(store, hotel_id)


@router.put(
    "/hotel/{hotel_id}",
    response_model=Hotel,
    responses={
        200: {"description": "Hotel updated", "model": Hotel},
        400: {"description": "Missing fields, invalid types or invalid rooms", "model": ErrorResponse},
        404: {"description": "Hotel not found", "model": ErrorResponse},
    },
    summary="Replace a hotel's details",
)
async def update_hotel(
    request: Request,
    hotel_id: str,
    payload: Any = _HOTEL_BODY,
    store: RecordStore = Depends(get_record_store),
) -> Hotel:
    """
    Replace a hotel's details.

    The body is validated exactly like a create, so a partial body is
    rejected with 400. `images` may be included to replace the image list;
    `hotelId` in the body is ignored.
    """
    request.state.hotel_id = hotel_id
    patch = validate_hotel_patch(payload)
    return await hotel_service.update(store, hotel_id, patch)
