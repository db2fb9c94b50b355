"""
Hotel Listings API: Hotel Payload Validator
=============================================

What:  Checks a raw JSON body before it may create or replace a hotel.
Who:   Called by the POST /hotel and PUT /hotel/{hotelId} route handlers.
How:   Three checks in strict order; the first failure raises and the rest
       are skipped:

           1. presence   → MissingFieldsError    ("All fields are required")
           2. types      → InvalidTypesError     ("Invalid data types")
           3. room shape → InvalidRoomShapeError ("Invalid room data structure")

Presence rules:
    Every field must be present and truthy, except latitude/longitude which
    only need to be present (0.0 is a real coordinate). Truthiness follows
    the JSON-client convention the API has always used: null, false, 0, NaN
    and "" are missing; arrays and objects count as present even when empty.

Type rules:
    "number" is a finite JSON number, never a boolean; "array" is a JSON array.
"""

import math
from typing import Any, Dict, List, Mapping

from hotel_api.exceptions import (
    InvalidRoomShapeError,
    InvalidTypesError,
    MissingFieldsError,
)
from hotel_api.schemas.hotel import HotelInput, HotelPatch

REQUIRED_FIELDS = (
    "title",
    "description",
    "guestCount",
    "bedroomCount",
    "bathroomCount",
    "amenities",
    "hostInfo",
    "address",
    "latitude",
    "longitude",
    "rooms",
)

# Present-if-key-exists fields
COORDINATE_FIELDS = frozenset({"latitude", "longitude"})

STRING_FIELDS = ("title", "description", "hostInfo", "address")
NUMBER_FIELDS = ("guestCount", "bedroomCount", "bathroomCount", "latitude", "longitude")
ARRAY_FIELDS = ("amenities", "rooms")

ROOM_STRING_FIELDS = ("roomSlug", "roomImage", "roomTitle")
ROOM_NUMBER_FIELDS = ("bedroomCount",)


def is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not numbers
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # 1e400 parses to inf, which the record file cannot hold as JSON
    return isinstance(value, int) or math.isfinite(value)


def is_falsy(value: Any) -> bool:
    """Falsy in the JSON-client sense: containers are always truthy."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def check_presence(payload: Mapping[str, Any]) -> None:
    for field in REQUIRED_FIELDS:
        if field not in payload:
            raise MissingFieldsError(field=field)
        if field not in COORDINATE_FIELDS and is_falsy(payload[field]):
            raise MissingFieldsError(field=field)


def check_types(payload: Mapping[str, Any]) -> None:
    for field in STRING_FIELDS:
        if not isinstance(payload[field], str):
            raise InvalidTypesError(field=field)
    for field in NUMBER_FIELDS:
        if not is_number(payload[field]):
            raise InvalidTypesError(field=field)
    for field in ARRAY_FIELDS:
        if not isinstance(payload[field], list):
            raise InvalidTypesError(field=field)


def is_valid_room(room: Any) -> bool:
    if not isinstance(room, dict):
        return False
    return all(isinstance(room.get(key), str) for key in ROOM_STRING_FIELDS) and all(
        is_number(room.get(key)) for key in ROOM_NUMBER_FIELDS
    )


def check_rooms(rooms: List[Any]) -> None:
    for index, room in enumerate(rooms):
        if not is_valid_room(room):
            raise InvalidRoomShapeError(index=index)


def validate_hotel_payload(payload: Any) -> HotelInput:
    """
    Validate a raw request body and return it as a HotelInput.

    A body that is not a JSON object has none of the required fields and
    fails the presence check.

    Raises:
        MissingFieldsError, InvalidTypesError, InvalidRoomShapeError
    """
    if not isinstance(payload, dict):
        raise MissingFieldsError(context={"body_type": type(payload).__name__})

    check_presence(payload)
    check_types(payload)
    check_rooms(payload["rooms"])

    return HotelInput.model_validate(_known_fields(payload))


def validate_hotel_patch(payload: Any) -> HotelPatch:
    """
    Validate an update body: the full create validation plus an optional
    `images` list of strings.
    """
    validated = validate_hotel_payload(payload)

    images = payload.get("images")
    if images is not None:
        if not isinstance(images, list) or not all(isinstance(url, str) for url in images):
            raise InvalidTypesError(field="images")

    return HotelPatch.model_validate(
        {**validated.model_dump(by_alias=True), "images": images}
    )


def _known_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {field: payload[field] for field in REQUIRED_FIELDS}
