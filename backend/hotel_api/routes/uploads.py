"""
Hotel Listings API: Uploaded File Serving
===========================================

What:  Serves previously uploaded image bytes under the uploads URL prefix.
Who:   Requested by clients following the URLs stored in a hotel's `images`.

Security:
    The requested path is resolved against the upload directory and rejected
    if it lands outside it (e.g. /uploads/../data/database.json).
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from hotel_api.config import settings
from hotel_api.exceptions import NotFoundError, ValidationError
from hotel_api.services.file_service import file_service

router = APIRouter(prefix=settings.uploads_url_prefix, tags=["Uploads"])


@router.get(
    "/{file_path:path}",
    summary="Serve an uploaded image",
    responses={
        200: {"description": "Image file"},
        404: {"description": "File not found"},
    },
)
async def serve_upload(file_path: str) -> FileResponse:
    try:
        full_path = file_service.resolve(file_path)
    except ValueError:
        raise ValidationError(message="Invalid file path", field="path")

    if not full_path.is_file():
        raise NotFoundError(resource="file", resource_id=file_path)

    # Media type is guessed from the file extension
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
