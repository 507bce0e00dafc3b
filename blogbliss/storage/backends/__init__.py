"""Storage backends for blob I/O."""

from blogbliss.storage.backends.base import StorageBackend, StorageError
from blogbliss.storage.backends.local import LocalStorageBackend
from blogbliss.storage.backends.s3 import S3StorageBackend

__all__ = ["LocalStorageBackend", "S3StorageBackend", "StorageBackend", "StorageError"]
