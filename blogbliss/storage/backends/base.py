"""Abstract base class for storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised by backends when the underlying store fails."""


class StorageBackend(ABC):
    """Abstract storage backend for blob I/O.

    Blobs are addressed by a slash-separated key relative to the backend
    root (a directory or a bucket). Implementations raise
    :class:`StorageError` on I/O failure.
    """

    #: True when locators should be stored as full public URLs.
    stores_urls: bool = False

    @abstractmethod
    async def write_file(self, key: str, data: bytes, content_type: str) -> None:
        """Create or overwrite a blob.

        Args:
            key: Blob key.
            data: Binary data to write.
            content_type: MIME type recorded with the blob where supported.
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a blob exists.

        Args:
            key: Blob key.

        Returns:
            True if the blob exists.
        """

    @abstractmethod
    async def delete_file(self, key: str) -> None:
        """Delete a blob. Deleting a missing blob is not an error.

        Args:
            key: Blob key.
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Return the URL clients use to fetch the blob."""
