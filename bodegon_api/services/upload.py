"""
Image upload adapter.

Only the returned URL is stored on the dish; the bytes live wherever the
adapter puts them. LocalUploadService writes under `upload_dir` and the
app serves that directory at /uploads.

Usage:
    from bodegon_api.services.upload import get_upload_service

    url = get_upload_service().upload(content, "flan.jpg", folder="dishes")
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Protocol

from fastapi import status

from shared.config.constants import ALLOWED_IMAGE_EXTENSIONS
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.exceptions import UploadError

logger = get_logger(__name__)


class UploadService(Protocol):
    """Stores raw image bytes and returns a stable URL."""

    def upload(self, content: bytes, filename: str, folder: str) -> str: ...


class LocalUploadService:
    """Upload adapter backed by the local filesystem."""

    def __init__(self, upload_dir: str | Path, base_url: str, max_bytes: int):
        self.upload_dir = Path(upload_dir)
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    @staticmethod
    def _get_extension(filename: str) -> str:
        return Path(filename).suffix.lower()

    def _validate(self, content: bytes, filename: str) -> str:
        """Check size and extension. Returns the extension."""
        if not content:
            raise UploadError("empty file", status_code=status.HTTP_400_BAD_REQUEST)

        ext = self._get_extension(filename)
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            allowed = ", ".join(sorted(ALLOWED_IMAGE_EXTENSIONS))
            raise UploadError(
                f"extension '{ext or filename}' not allowed. Use: {allowed}",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        if len(content) > self.max_bytes:
            max_mb = self.max_bytes / (1024 * 1024)
            raise UploadError(
                f"file too large. Max: {max_mb:.1f}MB",
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
        return ext

    def upload(self, content: bytes, filename: str, folder: str = "dishes") -> str:
        ext = self._validate(content, filename)
        name = f"{uuid.uuid4().hex[:12]}{ext}"

        target_dir = self.upload_dir / folder
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            (target_dir / name).write_bytes(content)
        except OSError as e:
            logger.error("Failed to write upload", path=str(target_dir / name), error=str(e))
            raise UploadError("could not store file")

        logger.info("Image stored", folder=folder, filename=name, size=len(content))
        return f"{self.base_url}/{folder}/{name}"


def get_upload_service() -> UploadService:
    """FastAPI dependency returning the configured upload adapter."""
    return LocalUploadService(
        upload_dir=settings.upload_dir,
        base_url=settings.upload_base_url,
        max_bytes=settings.upload_max_bytes,
    )
