"""
Photo Storage Interface
=======================

Abstract interface for storing student photo assets.
Implementations live in app.infrastructure.storage.
"""
from abc import ABC, abstractmethod

# Public path prefix every locally stored photo locator starts with
PHOTO_PATH_PREFIX = "/uploads/students/"


class PhotoStorage(ABC):
    """Stores raw image bytes and hands back an asset locator."""

    @abstractmethod
    def save(self, filename: str, content: bytes, content_type: str) -> str:
        """
        Persist an image.

        Args:
            filename: Target file name (no directories)
            content: Raw image bytes
            content_type: MIME type of the image

        Returns:
            Asset locator (public path or object URL)
        """
        pass

    @abstractmethod
    def delete(self, locator: str) -> bool:
        """
        Delete a previously stored image.

        Returns:
            True if the asset existed and was removed, False if it was not found

        Raises:
            ValueError: If the locator does not belong to this storage
        """
        pass

    @abstractmethod
    def owns(self, locator: str) -> bool:
        """Check whether a locator points into this storage."""
        pass
