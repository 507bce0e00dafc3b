"""Local filesystem storage backend using pathlib.

File I/O runs in a worker thread so large uploads do not stall the event loop.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from blogbliss.storage.backends.base import StorageBackend, StorageError


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


class LocalStorageBackend(StorageBackend):
    """Pathlib-based local filesystem storage backend.

    Locators are stored as bare keys and served by the application under
    ``public_base_url``.
    """

    def __init__(self, root: str, public_base_url: str = "/uploads") -> None:
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise StorageError(f"Key escapes storage root: {key}")
        return path

    async def write_file(self, key: str, data: bytes, content_type: str) -> None:
        """Write binary data to a local file."""
        p = self._path(key)
        try:
            await asyncio.to_thread(_write, p, data)
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e

    async def exists(self, key: str) -> bool:
        """Check if a local file exists."""
        return await asyncio.to_thread(self._path(key).is_file)

    async def delete_file(self, key: str) -> None:
        """Delete a local file if present."""
        p = self._path(key)
        try:
            await asyncio.to_thread(p.unlink, missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"
