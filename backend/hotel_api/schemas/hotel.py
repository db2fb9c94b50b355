"""
Hotel Listings API: Pydantic Hotel Schemas
============================================

What:  Pydantic models for hotel records, rooms, validated input, update
       patches, and API responses.
Why:   One definition serves as the on-disk record shape, the API contract,
       and the OpenAPI documentation.
How:   Python attributes are snake_case; the JSON (both on disk and over HTTP)
       uses the camelCase aliases, e.g. `hotel_id` ↔ `hotelId`.

Design Decision:
    Request bodies are NOT parsed with these models directly. FastAPI would
    coerce "4" into 4 and answer 422 on its own terms, while clients expect the
    exact 400 messages produced by `services/validator.py`. The validator checks
    the raw JSON first and only then builds `HotelInput` / `HotelPatch`.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# JSON numbers: keep ints as ints (4 stays 4, not 4.0)
Number = Union[int, float]


class Room(BaseModel):
    """A room embedded in a hotel. `room_slug` is unique per hotel by convention only."""

    model_config = ConfigDict(populate_by_name=True)

    room_slug: str = Field(alias="roomSlug")
    room_image: str = Field(alias="roomImage")
    room_title: str = Field(alias="roomTitle")
    bedroom_count: Number = Field(alias="bedroomCount")


class HotelInput(BaseModel):
    """
    What:  The client-supplied part of a hotel, after validation.
    Who:   Built by the validator; consumed by HotelService.create.

    `amenities` is only required to be an array; its items are stored as sent
    and duplicates are kept.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    guest_count: Number = Field(alias="guestCount")
    bedroom_count: Number = Field(alias="bedroomCount")
    bathroom_count: Number = Field(alias="bathroomCount")
    amenities: List[Any]
    host_info: str = Field(alias="hostInfo")
    address: str
    latitude: Number
    longitude: Number
    rooms: List[Room]


class Hotel(HotelInput):
    """
    What:  A stored hotel record, exactly as it appears in the record file.

    Invariants (enforced by HotelService, not by this model):
        - hotel_id is assigned once at creation and never changes
        - slug is derived from title
        - images only grows through the upload flow

    Why extra="allow":
        Keys written into the record file by other tools are carried through a
        load/save cycle instead of being silently dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    hotel_id: str = Field(alias="hotelId", description="Server-assigned identifier, e.g. hotel-3")
    slug: str = Field(description="URL-safe form of the title")
    images: List[str] = Field(default_factory=list, description="Absolute image URLs")


class HotelPatch(HotelInput):
    """
    What:  A validated update body.
    Why:   Update merges field by field from this explicit structure, so keys
           outside the hotel schema never reach the stored record.

    Update has full-record replace semantics: every HotelInput field is
    required (same validator as create). `images` is the only optional field;
    when present it replaces the stored list. `hotelId` and `slug` are never
    taken from the body.
    """

    images: Optional[List[str]] = None

    def apply_to(self, existing: Hotel, slug: str) -> Hotel:
        """Return `existing` with this patch's fields written over it."""
        changes = self.model_dump(exclude={"images"})
        changes["hotel_id"] = existing.hotel_id
        changes["slug"] = slug
        changes["images"] = list(self.images) if self.images is not None else existing.images
        # Rooms go back in as models, not dicts
        changes["rooms"] = list(self.rooms)
        return existing.model_copy(update=changes)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ImageUploadResponse(BaseModel):
    """Returned by POST /images: the hotel's full image list after the upload."""

    message: str = Field(default="Images uploaded successfully")
    images: List[str] = Field(description="Every image URL now attached to the hotel")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by all 4xx responses.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid data types",
            "details": {"field": "guestCount"},
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""

    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    record_store: str = Field(description="Record file state: readable, unreadable")
    uploads: str = Field(description="Upload directory state: available, missing")
    uptime_seconds: float = Field(description="Seconds since service started")
