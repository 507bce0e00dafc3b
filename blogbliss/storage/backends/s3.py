"""S3-compatible storage backend (AWS S3, MinIO, R2, Tencent COS).

boto3 is synchronous, so every call runs in a worker thread to keep the
request task from blocking the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from blogbliss.storage.backends.base import StorageBackend, StorageError

logger = logging.getLogger(__name__)

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3StorageBackend(StorageBackend):
    """Object-store backend; locators are stored as full public URLs.

    Attributes:
        bucket: Target bucket.
        public_base_url: Prefix of the public object URLs.
    """

    stores_urls = True

    def __init__(
        self,
        bucket: str,
        public_base_url: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        if client is None:
            client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                region_name=region,
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
                config=Config(signature_version="s3v4", retries={"max_attempts": 3}),
            )
        self._client = client

    async def write_file(self, key: str, data: bytes, content_type: str) -> None:
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Upload of {key} failed: {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            await asyncio.to_thread(self._client.head_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return False
            raise StorageError(f"Existence check of {key} failed: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Existence check of {key} failed: {e}") from e
        return True

    async def delete_file(self, key: str) -> None:
        # S3 DeleteObject succeeds for missing keys.
        try:
            await asyncio.to_thread(self._client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Delete of {key} failed: {e}") from e

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"
