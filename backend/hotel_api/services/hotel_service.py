"""
Hotel Listings API: Hotel Service (Business Logic Orchestrator)
=================================================================

What:  Create, look up and update hotel records.
Who:   Called by the /hotel route handlers after the payload is validated.
How:   Every operation reloads the full collection from the record store,
       works on it in memory, and (for mutations) saves the full collection
       back, all inside the store's transaction lock.

Orchestration Flow (PUT /hotel/{hotelId}):
    ┌───────────┐    ┌──────────┐    ┌───────────────┐    ┌──────────┐
    │ Validate  │───▶│ Load all │───▶│ Merge patch   │───▶│ Save all │
    │ (route)   │    │ (store)  │    │ keep hotelId  │    │ (store)  │
    └───────────┘    └──────────┘    └───────────────┘    └──────────┘

Design Decision:
    HotelService is stateless; the record store is passed into each call, the
    same way a database session would be. Tests hand in a store backed by a
    temporary file.
"""

import logging
import re
import unicodedata
from typing import List, Optional

from hotel_api.database import RecordStore
from hotel_api.exceptions import NotFoundError
from hotel_api.schemas.hotel import Hotel, HotelInput, HotelPatch

logger = logging.getLogger(__name__)

HOTEL_ID_PREFIX = "hotel-"
_HOTEL_ID_PATTERN = re.compile(rf"^{HOTEL_ID_PREFIX}(\d+)$")


def slugify(text: str) -> str:
    """
    Lowercase, ASCII-folded, hyphen-joined form of a title.

    Example: "Château Dünes & Spa" → "chateau-dunes-and-spa"
    """
    nfkd = unicodedata.normalize("NFKD", text.replace("&", " and "))
    ascii_text = "".join(c for c in nfkd if not unicodedata.combining(c))
    ascii_text = ascii_text.encode("ascii", "ignore").decode("ascii").lower()
    return re.sub(r"[^a-z0-9]+", "-", ascii_text).strip("-")


def next_hotel_id(hotels: List[Hotel]) -> str:
    """
    Next `hotel-<n>` id: one past the highest numeric suffix in use.

    Unlike counting records, this never hands out an id that is already taken,
    whatever ids (numeric or not) the file happens to hold.
    """
    highest = 0
    for hotel in hotels:
        match = _HOTEL_ID_PATTERN.match(hotel.hotel_id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{HOTEL_ID_PREFIX}{highest + 1}"


def find_hotel(hotels: List[Hotel], hotel_id: str) -> Optional[int]:
    """Index of the hotel with `hotel_id`, or None. Linear scan."""
    for index, hotel in enumerate(hotels):
        if hotel.hotel_id == hotel_id:
            return index
    return None


class HotelService:
    """
    Business logic layer for hotel records.

    Responsibilities:
        - create():     assign id and slug, append, persist
        - get_by_id():  lookup with not-found handling
        - update():     full-record replace that preserves hotelId

    Storage failures propagate unchanged (StorageReadError/StorageWriteError)
    and are answered with a 500 by the global handler.
    """

    async def create(self, store: RecordStore, data: HotelInput) -> Hotel:
        """
        Create a hotel from validated input.

        The new hotel gets a server-assigned id, a slug derived from its title,
        and an empty image list.
        """
        async with store.transaction():
            hotels = await store.load_all()

            hotel = Hotel(
                hotel_id=next_hotel_id(hotels),
                slug=slugify(data.title),
                images=[],
                **data.model_dump(),
            )
            hotels.append(hotel)
            await store.save_all(hotels)

        logger.info("Hotel created: %s (slug=%s)", hotel.hotel_id, hotel.slug)
        return hotel

    async def get_by_id(self, store: RecordStore, hotel_id: str) -> Hotel:
        """
        Raises:
            NotFoundError: no hotel has this id (→ 404 "Hotel not found")
        """
        async with store.transaction():
            hotels = await store.load_all()

        index = find_hotel(hotels, hotel_id)
        if index is None:
            raise NotFoundError(resource="hotel", resource_id=hotel_id)
        return hotels[index]

    async def update(self, store: RecordStore, hotel_id: str, patch: HotelPatch) -> Hotel:
        """
        Replace a hotel's fields with a validated patch.

        Merge rules:
            - every field in the patch overrides the stored value
            - hotelId always stays the stored one
            - slug is recomputed from the patch title
            - images is replaced only when the patch carries an images list

        Raises:
            NotFoundError: no hotel has this id. Nothing is written.
        """
        async with store.transaction():
            hotels = await store.load_all()

            index = find_hotel(hotels, hotel_id)
            if index is None:
                raise NotFoundError(resource="hotel", resource_id=hotel_id)

            existing = hotels[index]
            slug = slugify(patch.title) if patch.title else existing.slug
            updated = patch.apply_to(existing, slug=slug)

            hotels[index] = updated
            await store.save_all(hotels)

        logger.info("Hotel updated: %s (slug=%s)", updated.hotel_id, updated.slug)
        return updated


# ── Singleton Instance ────────────────────────────────────────────────────
hotel_service = HotelService()
