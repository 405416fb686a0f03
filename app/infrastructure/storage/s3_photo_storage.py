"""
S3 Photo Storage
================

Stores photos in an S3 bucket under uploads/students/ and hands back the
object URL.
"""
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import ClientError

from app.domain.storage.photo_storage import PHOTO_PATH_PREFIX, PhotoStorage

logger = logging.getLogger(__name__)


class S3PhotoStorage(PhotoStorage):
    """S3 implementation of PhotoStorage."""

    def __init__(
        self,
        bucket_name: str,
        region: str,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        if not bucket_name:
            raise ValueError("S3_BUCKET_NAME is required when PHOTO_STORAGE=s3")

        self.bucket_name = bucket_name
        # AWS S3 client; credentials fall back to the default provider chain
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
        )
        self._base_url = (
            public_base_url or f"https://{bucket_name}.s3.{region}.amazonaws.com"
        ).rstrip("/")
        self._key_prefix = PHOTO_PATH_PREFIX.lstrip("/")

    def _url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    def _key_for(self, locator: str) -> str:
        if not self.owns(locator):
            raise ValueError(f"Photo URL does not belong to bucket {self.bucket_name}")
        return locator[len(self._base_url) + 1:]

    def owns(self, locator: str) -> bool:
        return bool(locator) and locator.startswith(f"{self._base_url}/{self._key_prefix}")

    def save(self, filename: str, content: bytes, content_type: str) -> str:
        key = f"{self._key_prefix}{filename}"
        self.client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=content,
            ContentType=content_type,
        )
        logger.info("Uploaded photo to s3://%s/%s", self.bucket_name, key)
        return self._url_for(key)

    def delete(self, locator: str) -> bool:
        key = self._key_for(locator)
        try:
            self.client.head_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise

        self.client.delete_object(Bucket=self.bucket_name, Key=key)
        logger.info("Deleted photo s3://%s/%s", self.bucket_name, key)
        return True
