"""
Hotel Listings API: Record Store
==================================

What:  Loads and saves the whole hotel collection as one JSON file, and
       provides the store to route handlers as a FastAPI dependency.
Why:   The collection is small and only looked up by id, so a single
       human-readable file is the whole persistence layer.
How:   `load_all()` reads and parses the entire file; `save_all()` serializes
       the entire collection and overwrites the file. There are no partial
       reads, no appends, no indexes and no cache between requests.

Concurrency:
    Requests are handled on one event loop but yield at every file read and
    write. Two overlapping load → mutate → save cycles would otherwise let the
    later save silently discard the earlier one (a lost update). Every cycle
    runs inside `transaction()`, which holds a single asyncio.Lock per store.
    The lock covers one process only; running several workers against the
    same file brings the lost update back.

File format:
    [
      {
        "hotelId": "hotel-1",
        "slug": "seaside-inn",
        "images": [],
        ...
      }
    ]
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional, Sequence

import aiofiles
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from hotel_api.config import settings
from hotel_api.exceptions import StorageReadError, StorageWriteError
from hotel_api.schemas.hotel import Hotel

logger = logging.getLogger(__name__)

_hotel_list = TypeAdapter(List[Hotel])


class RecordStore:
    """
    Full-file persistence for the hotel collection.

    Usage (inside a service):
        async with store.transaction():
            hotels = await store.load_all()
            hotels.append(new_hotel)
            await store.save_all(hotels)
    """

    def __init__(self, path: Optional[str] = None):
        """
        Args:
            path: Override the record file location (used in tests).
                  If None, uses settings.database_file.
        """
        self.path = Path(path or settings.database_file)
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["RecordStore"]:
        """Serialize a load → mutate → save cycle against other requests."""
        async with self._lock:
            yield self

    async def load_all(self) -> List[Hotel]:
        """
        Read and parse the entire record file.

        Raises:
            StorageReadError: file missing or unreadable, content is not JSON,
                              or the JSON is not an array of hotel records.
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            logger.error("Failed to read record file %s: %s", self.path, str(e))
            raise StorageReadError(context={"path": str(self.path), "os_error": str(e)})

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Record file %s is not valid JSON: %s", self.path, str(e))
            raise StorageReadError(context={"path": str(self.path), "decode_error": str(e)})

        if not isinstance(data, list):
            logger.error("Record file %s does not hold a JSON array", self.path)
            raise StorageReadError(
                context={"path": str(self.path), "found_type": type(data).__name__}
            )

        try:
            return _hotel_list.validate_python(data)
        except PydanticValidationError as e:
            logger.error("Record file %s holds malformed hotels: %s", self.path, str(e))
            raise StorageReadError(context={"path": str(self.path), "errors": e.error_count()})

    async def save_all(self, hotels: Sequence[Hotel]) -> None:
        """
        Overwrite the record file with the given collection.

        No atomic rename: a crash mid-write can leave a truncated file, which
        the next load reports as StorageReadError.

        Raises:
            StorageWriteError: the file could not be written, or a record
                holds a non-finite number.
        """
        try:
            # allow_nan=False: Infinity/NaN tokens are not JSON
            payload = json.dumps(
                [hotel.model_dump(by_alias=True) for hotel in hotels],
                indent=2,
                ensure_ascii=False,
                allow_nan=False,
            )
        except ValueError as e:
            logger.error("Refusing to write non-JSON value to %s: %s", self.path, str(e))
            raise StorageWriteError(context={"path": str(self.path), "reason": str(e)})

        try:
            async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            logger.error("Failed to write record file %s: %s", self.path, str(e))
            raise StorageWriteError(context={"path": str(self.path), "os_error": str(e)})

        logger.debug("Saved %d hotel records to %s", len(hotels), self.path)

    async def initialize(self) -> bool:
        """
        Create an empty collection file if none exists.

        Returns True when a file was created. An existing file is left alone
        even if it is corrupt.
        """
        if self.path.exists():
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(context={"path": str(self.path), "os_error": str(e)})
        await self.save_all([])
        logger.info("Created empty record file at %s", self.path.resolve())
        return True

    async def is_readable(self) -> bool:
        """Health check: True when the file loads as a valid collection."""
        try:
            await self.load_all()
        except StorageReadError:
            return False
        return True


# ── Singleton Instance ────────────────────────────────────────────────────
# One store (and therefore one lock) per process
record_store = RecordStore()


# ── Store Dependency ──────────────────────────────────────────────────────
async def get_record_store() -> RecordStore:
    """
    FastAPI dependency that provides the record store to route handlers.

    Tests replace it through `app.dependency_overrides[get_record_store]` to
    point the API at a temporary file.
    """
    return record_store
