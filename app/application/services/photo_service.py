"""
Photo Service
=============

Media side-channel for student photos: decodes inline data URIs, enforces
type and size limits, writes the asset through a PhotoStorage backend and
removes superseded assets.

Removing an old asset is best-effort: failures are logged and never raised.
"""
import base64
import binascii
import logging
import re
import secrets
import time
from typing import Optional, Tuple

from app.core.errors import NotFoundError, ValidationError
from app.domain.storage.photo_storage import PhotoStorage

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
}
DEFAULT_MAX_BYTES = 1024 * 1024  # 1MB

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def is_data_uri(value: Optional[str]) -> bool:
    """Check if a photo value is an inline image rather than a stored locator."""
    return bool(value) and value.startswith("data:")


def sanitize_name(name: Optional[str]) -> str:
    """Reduce a display name to a safe file name fragment."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name or "student").lower()[:50]


class PhotoService:
    """
    Application service for photo assets.

    Backs both the GraphQL mutations (inline data URIs) and the REST
    upload endpoints (raw file bytes).
    """

    def __init__(self, storage: PhotoStorage, max_bytes: int = DEFAULT_MAX_BYTES):
        """
        Initialize service with a storage backend.

        Args:
            storage: Backend that persists the image bytes
            max_bytes: Upper bound on decoded image size
        """
        self._storage = storage
        self._max_bytes = max_bytes

    def decode_data_uri(self, data_uri: str) -> Tuple[bytes, str]:
        """
        Decode a data URI into raw bytes and its MIME type.

        Raises:
            ValidationError: If the URI is malformed or not a valid base64 image
        """
        match = DATA_URI_PATTERN.match(data_uri.strip())
        if not match:
            raise ValidationError("Invalid photo", {"photo": "Photo must be a base64 data URI"})

        try:
            content = base64.b64decode(match.group("data"), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError("Invalid photo", {"photo": "Photo is not valid base64"}) from e

        return content, match.group("mime").lower()

    def validate_image(self, content: bytes, content_type: Optional[str]) -> str:
        """
        Enforce type and size limits.

        Returns:
            File extension for the content type

        Raises:
            ValidationError: If the type is not JPEG/PNG or the image is too large
        """
        content_type = (content_type or "").lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(
                "Invalid photo",
                {"photo": "Invalid file type. Only JPG, JPEG, and PNG are allowed."},
            )
        if not content:
            raise ValidationError("Invalid photo", {"photo": "Photo is empty"})
        if len(content) > self._max_bytes:
            raise ValidationError(
                "Invalid photo",
                {"photo": f"File size exceeds {self._max_bytes // 1024 // 1024 or 1}MB limit."},
            )
        return ALLOWED_CONTENT_TYPES[content_type]

    def build_filename(self, student_id: Optional[str], student_name: Optional[str], extension: str) -> str:
        """Build `{id}_{epoch_millis}_{token}_{name}.{ext}`."""
        timestamp = int(time.time() * 1000)
        token = secrets.token_hex(3)
        return f"{student_id or 'new'}_{timestamp}_{token}_{sanitize_name(student_name)}.{extension}"

    def store(
        self,
        content: bytes,
        content_type: Optional[str],
        student_id: Optional[str],
        student_name: Optional[str],
        previous: Optional[str] = None,
    ) -> str:
        """
        Validate and store raw image bytes, then drop the previous asset.

        Args:
            content: Raw image bytes
            content_type: MIME type reported by the client
            student_id: Record the photo belongs to
            student_name: Used to make the file name readable
            previous: Locator of the asset being replaced

        Returns:
            Locator of the stored asset
        """
        extension = self.validate_image(content, content_type)
        filename = self.build_filename(student_id, student_name, extension)
        locator = self._storage.save(filename, content, content_type.lower())

        if previous and previous != locator:
            self.discard(previous)
        return locator

    def store_data_uri(
        self,
        data_uri: str,
        student_id: str,
        student_name: Optional[str],
        previous: Optional[str] = None,
    ) -> str:
        """Decode an inline image and store it. See store()."""
        content, content_type = self.decode_data_uri(data_uri)
        return self.store(content, content_type, student_id, student_name, previous)

    def discard(self, locator: Optional[str]) -> bool:
        """
        Best-effort removal of an asset.

        Returns:
            True if the asset was removed
        """
        if not locator:
            return False
        if not self._storage.owns(locator):
            logger.info("Not deleting photo %s: not managed by this storage", locator)
            return False
        try:
            return self._storage.delete(locator)
        except Exception as e:
            logger.error("Error deleting old photo %s: %s", locator, e)
            return False

    def delete(self, locator: Optional[str]) -> None:
        """
        Delete an asset on explicit request.

        Raises:
            ValidationError: If the locator is missing or outside the upload prefix
            NotFoundError: If the asset does not exist
        """
        if not locator or not isinstance(locator, str):
            raise ValidationError("Photo path is required", {"photoPath": "Photo path is required"})
        if not self._storage.owns(locator):
            raise ValidationError("Invalid photo path", {"photoPath": "Invalid photo path"})

        try:
            removed = self._storage.delete(locator)
        except ValueError as e:
            raise ValidationError("Invalid photo path", {"photoPath": str(e)}) from e
        if not removed:
            raise NotFoundError("File")
