"""Core orchestration for BlogBliss."""

from blogbliss.core.assets import (
    POST_THUMBNAIL,
    USER_AVATAR,
    AssetBinding,
    AssetLinkedEntityManager,
    AssetUpload,
)

__all__ = [
    "AssetBinding",
    "AssetLinkedEntityManager",
    "AssetUpload",
    "POST_THUMBNAIL",
    "USER_AVATAR",
]
