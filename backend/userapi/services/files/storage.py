# backend/userapi/services/files/storage.py
import asyncio
import base64
import binascii
import logging
from pathlib import Path

from userapi.core.config import settings
from userapi.core.security import random_token

logger = logging.getLogger(__name__)

JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def detect_image_type(data: bytes) -> str | None:
    """Return "jpeg" or "png" based on the file signature, None otherwise."""
    if data.startswith(JPEG_SIGNATURE):
        return "jpeg"
    if data.startswith(PNG_SIGNATURE):
        return "png"
    return None


def decode_base64_image(value: str) -> bytes | None:
    """Decode a base64 image payload, tolerating a data: URL prefix."""
    if value.startswith("data:") and "," in value:
        value = value.split(",", 1)[1]
    try:
        return base64.b64decode(value, validate=False)
    except (binascii.Error, ValueError):
        return None


class FileService:
    """Stores profile images on the local filesystem."""

    def __init__(
        self,
        upload_dir: str | Path | None = None,
        profile_dir: str | None = None,
        max_image_bytes: int | None = None,
    ):
        self.upload_dir = Path(upload_dir if upload_dir is not None else settings.upload_dir)
        self.profile_directory = self.upload_dir / (profile_dir or settings.profile_dir)
        self.max_image_bytes = max_image_bytes if max_image_bytes is not None else settings.max_profile_image_bytes

    def create_folders(self) -> None:
        self.profile_directory.mkdir(parents=True, exist_ok=True)

    def is_within_size_limit(self, data: bytes) -> bool:
        return len(data) <= self.max_image_bytes

    async def save_profile_image(self, data: bytes) -> str:
        """Write image bytes under a random name and return the name."""
        filename = random_token(16)
        path = self.profile_directory / filename
        await asyncio.to_thread(self._write, path, data)
        logger.debug(f"Saved profile image {filename} ({len(data)} bytes)")
        return filename

    async def delete_profile_image(self, filename: str | None) -> None:
        if not filename:
            return
        # Stored names are generated by us; refuse anything that is not a bare name
        if Path(filename).name != filename:
            logger.warning(f"Refusing to delete suspicious image path: {filename!r}")
            return
        path = self.profile_directory / filename
        await asyncio.to_thread(path.unlink, True)

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
