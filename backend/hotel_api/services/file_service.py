"""
Hotel Listings API: Upload File Storage
=========================================

What:  Writes uploaded image bytes into the upload directory and turns the
       stored name into a public URL.
Who:   Called by ImageService while attaching images to a hotel.
When:  After the multipart form has been parsed, before the hotel lookup.

Naming:
    <epoch milliseconds>-<original base name>, e.g. 1718000000123-lobby.jpg

    Only the base name of the client filename is used, so a name like
    "../../etc/passwd" cannot leave the upload directory. Two uploads of the
    same name in the same millisecond collide and the later one wins.

Directory Structure:
    uploads/
    ├── 1718000000123-lobby.jpg
    └── 1718000000456-pool.png
"""

import logging
import time
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional, Tuple
from urllib.parse import quote

import aiofiles

from hotel_api.config import settings
from hotel_api.exceptions import UploadError

logger = logging.getLogger(__name__)

# Used when a client sends a file part without a usable filename
DEFAULT_UPLOAD_NAME = "upload"


class FileService:
    """
    Manages the upload directory.

    Lifecycle of an uploaded file:
        1. ImageService hands over (filename, bytes)
        2. A timestamped storage name is generated
        3. Bytes are written with async file I/O
        4. The public URL is built from settings.uploads_base_url
    """

    def __init__(self, uploads_dir: Optional[str] = None, base_url: Optional[str] = None):
        """
        Args:
            uploads_dir: Override the default upload directory (used in tests).
            base_url:    Override the public URL prefix for stored files.
        """
        self.uploads_dir = Path(uploads_dir or settings.uploads_dir).resolve()
        self.base_url = (base_url or settings.uploads_base_url).rstrip("/")
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileService initialized with uploads_dir=%s", self.uploads_dir)

    @staticmethod
    def safe_basename(filename: Optional[str]) -> str:
        """Strip any directory part (POSIX or Windows style) from a client filename."""
        if not filename:
            return DEFAULT_UPLOAD_NAME
        name = PureWindowsPath(PurePosixPath(filename).name).name.strip()
        if name in {"", ".", ".."}:
            return DEFAULT_UPLOAD_NAME
        return name

    def generate_storage_name(self, filename: Optional[str]) -> str:
        return f"{int(time.time() * 1000)}-{self.safe_basename(filename)}"

    def public_url(self, storage_name: str) -> str:
        return f"{self.base_url}/{quote(storage_name)}"

    def resolve(self, relative_path: str) -> Path:
        """
        Absolute path of a stored file.

        Raises:
            ValueError: the path points outside the upload directory.
        """
        candidate = (self.uploads_dir / relative_path).resolve()
        if not candidate.is_relative_to(self.uploads_dir):
            raise ValueError(f"Path escapes upload directory: {relative_path}")
        return candidate

    async def store_upload(self, filename: Optional[str], content: bytes) -> Tuple[str, str]:
        """
        Write one uploaded file to the upload directory.

        Returns:
            Tuple of (storage_name, public_url).

        Raises:
            UploadError if the directory or file cannot be written.
        """
        storage_name = self.generate_storage_name(filename)
        absolute_path = self.uploads_dir / storage_name

        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", absolute_path, str(e))
            raise UploadError(
                reason="Could not save uploaded file",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("Upload stored: %s (%d bytes)", storage_name, len(content))
        return storage_name, self.public_url(storage_name)


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
