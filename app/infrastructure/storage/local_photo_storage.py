"""
Local Photo Storage
===================

Stores photos on the local filesystem under <upload_root>/uploads/students
and hands back public paths such as /uploads/students/<file>.
"""
import logging
import os
from pathlib import Path

from app.domain.storage.photo_storage import PHOTO_PATH_PREFIX, PhotoStorage

logger = logging.getLogger(__name__)


class LocalPhotoStorage(PhotoStorage):
    """Filesystem implementation of PhotoStorage."""

    def __init__(self, upload_root: str):
        """
        Args:
            upload_root: Directory served as the public web root
        """
        self._root = Path(upload_root).resolve()
        self._directory = self._root / PHOTO_PATH_PREFIX.strip("/")

    @property
    def directory(self) -> Path:
        return self._directory

    def _ensure_directory(self) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)

    def _resolve(self, locator: str) -> Path:
        """Map a public locator to a file inside the upload directory."""
        if not self.owns(locator):
            raise ValueError(f"Photo path must start with {PHOTO_PATH_PREFIX}")
        path = (self._root / locator.lstrip("/")).resolve()
        if path.parent != self._directory:
            raise ValueError("Photo path escapes the upload directory")
        return path

    def owns(self, locator: str) -> bool:
        return bool(locator) and locator.startswith(PHOTO_PATH_PREFIX)

    def save(self, filename: str, content: bytes, content_type: str) -> str:
        self._ensure_directory()
        if os.path.basename(filename) != filename:
            raise ValueError("Filename must not contain directories")

        (self._directory / filename).write_bytes(content)
        logger.info("Stored photo %s (%d bytes, %s)", filename, len(content), content_type)
        return f"{PHOTO_PATH_PREFIX}{filename}"

    def delete(self, locator: str) -> bool:
        path = self._resolve(locator)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted photo %s", locator)
        return True
