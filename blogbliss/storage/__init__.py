"""Blob storage package for BlogBliss.

Provides asset upload, existence checks, deletion and locator rendering for
post thumbnails and user avatars.

Examples:
    >>> from blogbliss.storage import StorageService, StorageConfig
    >>> service = StorageService.from_config(StorageConfig())
    >>> locator = await service.upload(data, "cover.png", "image/png", prefix="thumbnails")
"""

from blogbliss.storage.backends import (
    LocalStorageBackend,
    S3StorageBackend,
    StorageBackend,
    StorageError,
)
from blogbliss.storage.config import StorageConfig
from blogbliss.storage.naming import generate_asset_key, sanitize_slug
from blogbliss.storage.service import StorageService

__all__ = [
    "LocalStorageBackend",
    "S3StorageBackend",
    "StorageBackend",
    "StorageConfig",
    "StorageError",
    "StorageService",
    "generate_asset_key",
    "sanitize_slug",
]
