from typing import TYPE_CHECKING
from ...core.config import Settings, get_settings
from ...domain.storage.photo_storage import PhotoStorage
from ...application.services.photo_service import PhotoService
from ...infrastructure.storage.local_photo_storage import LocalPhotoStorage
from ...infrastructure.storage.s3_photo_storage import S3PhotoStorage

if TYPE_CHECKING:
    from ..base_container import BaseContainer


def build_photo_storage(settings: Settings) -> PhotoStorage:
    """
    Create the backend named by PHOTO_STORAGE.

    Raises:
        ValueError: If PHOTO_STORAGE names an unknown backend
    """
    if settings.photo_storage == "local":
        return LocalPhotoStorage(settings.upload_root)
    if settings.photo_storage == "s3":
        return S3PhotoStorage(
            bucket_name=settings.s3_bucket_name,
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            public_base_url=settings.s3_public_base_url,
        )
    raise ValueError(f"Unknown PHOTO_STORAGE '{settings.photo_storage}' (expected 'local' or 's3')")


class StorageProvider:
    """Photo storage provider - picks the backend from PHOTO_STORAGE"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the PhotoStorage backend and the PhotoService built on it.
        Both are built on first use, so no S3 client exists until a photo is touched.
        """
        settings = get_settings()
        container.register_lazy(PhotoStorage, lambda: build_photo_storage(settings))
        container.register_lazy(
            PhotoService,
            lambda: PhotoService(storage=container.get(PhotoStorage), max_bytes=settings.max_photo_bytes),
        )
