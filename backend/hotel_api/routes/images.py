"""
Hotel Listings API: Image Upload Route Handler
================================================

What:  POST /images, a multipart form with a `hotelId` field and up to
       `max_upload_files` files under the `images` field.
How:   The upload layer below reads and checks the form, then ImageService
       stores the files and appends their URLs to the hotel.

Request Flow:
    1. Require multipart/form-data, then parse it (Starlette / python-multipart)
    2. Reject files under any other field, or too many files → UploadError (500)
    3. Read each file into memory and close it
    4. ImageService.attach: write files, look up hotel, append URLs, save
    5. Return 200 {"message": ..., "images": [...]}
"""

import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import FormData
from starlette.datastructures import UploadFile as StarletteUploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from hotel_api.config import settings
from hotel_api.database import RecordStore, get_record_store
from hotel_api.exceptions import UploadError
from hotel_api.schemas.hotel import ErrorResponse, ImageUploadResponse
from hotel_api.services.image_service import UploadedImage, image_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


async def _parse_form(request: Request) -> FormData:
    # request.form() would also accept urlencoded bodies, and JSON would
    # reach the service as a missing hotelId
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise UploadError(
            reason="Expected multipart form",
            context={"content_type": content_type or None},
        )
    try:
        return await request.form()
    except StarletteHTTPException as e:
        # Starlette reports malformed multipart bodies as HTTP 400
        raise UploadError(reason=str(e.detail))


async def read_upload_form(request: Request) -> Tuple[Optional[str], List[UploadedImage]]:
    """
    Extract the hotel id and the uploaded files from a multipart request.

    Raises:
        UploadError: not multipart, unparseable form, file under an unexpected field, or
                     more files than settings.max_upload_files.
    """
    form = await _parse_form(request)
    try:
        file_parts: List[StarletteUploadFile] = []
        for key, value in form.multi_items():
            if not isinstance(value, StarletteUploadFile):
                continue
            if key != settings.upload_field_name:
                raise UploadError(reason="Unexpected field", context={"field": key})
            file_parts.append(value)

        if len(file_parts) > settings.max_upload_files:
            raise UploadError(
                reason="Too many files",
                context={"received": len(file_parts), "limit": settings.max_upload_files},
            )

        uploads = [
            UploadedImage(filename=part.filename, content=await part.read())
            for part in file_parts
        ]
    finally:
        await form.close()

    hotel_id = form.get("hotelId")
    if not isinstance(hotel_id, str):
        hotel_id = None
    return hotel_id, uploads


@router.post(
    "/images",
    response_model=ImageUploadResponse,
    responses={
        200: {"description": "Images stored and attached", "model": ImageUploadResponse},
        404: {"description": "Hotel not found", "model": ErrorResponse},
        500: {"description": "Upload rejected or storage failure", "model": ErrorResponse},
    },
    summary="Upload images and attach them to a hotel",
)
async def upload_images(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> ImageUploadResponse:
    hotel_id, uploads = await read_upload_form(request)
    request.state.hotel_id = hotel_id
    request.state.upload_count = len(uploads)

    logger.info(
        "Received image upload: hotel=%s, files=%d, bytes=%d",
        hotel_id,
        len(uploads),
        sum(len(upload.content) for upload in uploads),
    )

    images = await image_service.attach(store, hotel_id, uploads)
    return ImageUploadResponse(images=images)
