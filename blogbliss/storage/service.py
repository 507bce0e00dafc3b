"""Storage service - main entry point for blob I/O.

Handles uploading, existence checks and deletion of assets, and translates
between the locators stored on records and backend keys. Two locator formats
coexist: bare keys written by the local backend (legacy) and full public URLs
written by the object-store backend.

Examples:
    >>> from blogbliss.storage.service import StorageService
    >>> service = StorageService.from_config(config)
    >>> locator = await service.upload(data, "photo.png", "image/png", prefix="avatars")
    >>> service.display_url(locator)
    'https://bucket.s3.us-east-1.amazonaws.com/avatars/photo-1c9e....png'
"""

from __future__ import annotations

import logging
from urllib.parse import unquote, urlparse

from blogbliss.config import StorageBackendType
from blogbliss.storage.backends.base import StorageBackend
from blogbliss.storage.backends.local import LocalStorageBackend
from blogbliss.storage.backends.s3 import S3StorageBackend
from blogbliss.storage.config import StorageConfig
from blogbliss.storage.naming import generate_asset_key

logger = logging.getLogger(__name__)


def is_absolute_url(locator: str) -> bool:
    return locator.startswith(("http://", "https://"))


class StorageService:
    """Main orchestrator for blob storage operations.

    Attributes:
        config: Storage configuration.
        backend: Storage backend for I/O.
    """

    def __init__(self, config: StorageConfig, backend: StorageBackend | None = None) -> None:
        self.config = config
        self.backend = backend or LocalStorageBackend(config.root, config.public_base_url)

    @classmethod
    def from_config(cls, config: StorageConfig) -> "StorageService":
        """Create a StorageService with the backend the config names."""
        if config.backend == StorageBackendType.S3:
            backend: StorageBackend = S3StorageBackend(
                bucket=config.bucket or "",
                public_base_url=config.public_base_url,
                region=config.region,
                endpoint_url=config.endpoint_url,
                access_key_id=config.access_key_id,
                secret_access_key=config.secret_access_key,
            )
        else:
            backend = LocalStorageBackend(config.root, config.public_base_url)
        return cls(config=config, backend=backend)

    def key_for(self, locator: str) -> str:
        """Resolve a stored locator (bare key or URL) to a backend key."""
        base = self.config.public_base_url.rstrip("/")
        if locator.startswith(base + "/"):
            return unquote(locator[len(base) + 1:])
        if is_absolute_url(locator):
            path = unquote(urlparse(locator).path).lstrip("/")
            # Path-style URLs carry the bucket as the first segment.
            bucket = self.config.bucket
            if bucket and path.startswith(bucket + "/"):
                path = path[len(bucket) + 1:]
            return path
        return locator.lstrip("/")

    def locator_for(self, key: str) -> str:
        """Value persisted on a record for a freshly uploaded key."""
        if self.backend.stores_urls:
            return self.backend.public_url(key)
        return key

    def display_url(self, locator: str | None) -> str | None:
        """Render a stored locator as a link clients can fetch."""
        if not locator:
            return None
        if is_absolute_url(locator):
            return locator
        return self.backend.public_url(locator.lstrip("/"))

    async def upload(
        self,
        data: bytes,
        filename: str | None,
        content_type: str | None,
        prefix: str,
    ) -> str:
        """Upload bytes under a new unique key.

        Returns:
            The locator to store on the owning record.

        Raises:
            StorageError: If the backend write fails.
        """
        key = generate_asset_key(prefix, filename)
        await self.backend.write_file(key, data, content_type or "application/octet-stream")
        logger.info(f"Blob uploaded: {key} ({len(data)} bytes)")
        return self.locator_for(key)

    async def exists(self, locator: str) -> bool:
        return await self.backend.exists(self.key_for(locator))

    async def delete(self, locator: str | None) -> bool:
        """Delete the blob a locator points at.

        Returns:
            True if a blob was removed, False if there was nothing to remove.

        Raises:
            StorageError: If the backend fails.
        """
        if not locator:
            return False
        key = self.key_for(locator)
        if not await self.backend.exists(key):
            logger.info(f"Blob already absent: {key}")
            return False
        await self.backend.delete_file(key)
        logger.info(f"Blob deleted: {key}")
        return True
