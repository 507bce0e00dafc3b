"""FastAPI dependencies that build services from process-wide collaborators.

The storage service is constructed once per process from settings and then
injected; tests override :func:`get_storage_service` to point at a
temporary directory.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from blogbliss.config import Settings, get_settings
from blogbliss.core.assets import AssetUpload
from blogbliss.database import get_db_session
from blogbliss.services.posts import PostService
from blogbliss.services.users import UserService
from blogbliss.storage.config import StorageConfig
from blogbliss.storage.service import StorageService


@lru_cache
def get_storage_service() -> StorageService:
    """Get the process-wide storage service."""
    return StorageService.from_config(StorageConfig.from_settings(get_settings()))


def get_post_service(
    session: AsyncSession = Depends(get_db_session),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings),
) -> PostService:
    return PostService(session, storage, settings)


def get_user_service(
    session: AsyncSession = Depends(get_db_session),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(session, storage, settings)


async def read_upload(file: UploadFile | None, limit: int) -> AssetUpload | None:
    """Read a multipart file into memory.

    At most ``limit + 1`` bytes are read, which is enough for the size check
    to reject an oversized upload without buffering all of it.

    Returns:
        None when no file was sent.
    """
    if file is None or not file.filename:
        return None
    data = await file.read(limit + 1)
    return AssetUpload(data=data, filename=file.filename, content_type=file.content_type)
