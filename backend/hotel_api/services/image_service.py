"""
Hotel Listings API: Image Attachment Service
==============================================

What:  Stores uploaded images and appends their URLs to a hotel's image list.
Who:   Called by POST /images once the upload layer has accepted the form.

Orchestration Flow:
    ┌──────────────┐    ┌──────────┐    ┌──────────────┐    ┌──────────┐
    │ Write bytes  │───▶│ Load all │───▶│ Append URLs  │───▶│ Save all │
    │ (FileService)│    │ (store)  │    │ to images    │    │ (store)  │
    └──────────────┘    └──────────┘    └──────────────┘    └──────────┘

Known inconsistency:
    Files are written before the hotel is looked up. When the hotel id does
    not exist the request fails with NotFoundError, but the files stay in the
    upload directory. No cleanup is attempted.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from hotel_api.database import RecordStore
from hotel_api.exceptions import NotFoundError
from hotel_api.services.file_service import file_service
from hotel_api.services.hotel_service import find_hotel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    """One file part from the multipart form, already read into memory."""

    filename: Optional[str]
    content: bytes


class ImageService:
    """Attaches uploaded images to hotels. Stateless; the store is passed per call."""

    async def attach(
        self,
        store: RecordStore,
        hotel_id: Optional[str],
        files: Sequence[UploadedImage],
    ) -> List[str]:
        """
        Store every file, then append their URLs to the hotel's images.

        Returns:
            The hotel's complete image list after the append.

        Raises:
            UploadError:   a file could not be written
            NotFoundError: no hotel has this id (files are already on disk)
        """
        urls = []
        for upload in files:
            _, url = await file_service.store_upload(upload.filename, upload.content)
            urls.append(url)

        async with store.transaction():
            hotels = await store.load_all()

            index = find_hotel(hotels, hotel_id) if hotel_id else None
            if index is None:
                logger.warning(
                    "Image upload for unknown hotel %s left %d file(s) on disk",
                    hotel_id,
                    len(urls),
                )
                raise NotFoundError(resource="hotel", resource_id=hotel_id)

            hotel = hotels[index]
            hotel.images.extend(urls)
            await store.save_all(hotels)

        logger.info("Attached %d image(s) to %s", len(urls), hotel.hotel_id)
        return list(hotel.images)


# ── Singleton Instance ────────────────────────────────────────────────────
image_service = ImageService()
