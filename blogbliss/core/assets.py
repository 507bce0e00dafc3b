"""Asset-linked entity mutations.

An asset-linked entity is a record that references exactly one managed blob:
a post and its thumbnail, a user and their avatar. The manager keeps the
record and the blob store as close to consistent as two independent stores
allow:

    create:  upload new blob -> write record
    replace: upload new blob -> update record -> delete old blob
    delete:  delete record -> delete blob

A record is never committed pointing at a blob that has not been uploaded,
and a blob is only removed after no committed record references it. Cleanup
deletes are best-effort: failures are logged, the request still succeeds,
and the worst case is an orphaned blob.

Examples:
    >>> manager = AssetLinkedEntityManager(session, storage, POST_THUMBNAIL)
    >>> post = await manager.create_with_asset(
    ...     Post(title="Hi", description="...", creator_id=user.id),
    ...     AssetUpload(data=png, filename="cover.png", content_type="image/png"),
    ...     max_bytes=2_000_000,
    ... )

Tests:
    - tests/unit/test_assets.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogbliss.errors import (
    ForbiddenError,
    NotFoundError,
    SizeExceededError,
    UploadFailedError,
    UpstreamError,
)
from blogbliss.models import Base, Post, User
from blogbliss.storage.backends.base import StorageError
from blogbliss.storage.service import StorageService

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Base)


@dataclass(frozen=True)
class AssetUpload:
    """An uploaded file held in memory."""

    data: bytes
    filename: str | None = None
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class AssetBinding(Generic[EntityT]):
    """Describes how an entity type references its blob.

    Attributes:
        model: ORM model class.
        asset_attr: Attribute holding the blob locator.
        owner_attr: Attribute compared against the requester id.
        prefix: Key namespace for uploaded blobs.
        label: Human-readable entity name for error messages.
        too_large_message: Message reported when an upload exceeds the limit.
    """

    model: type[EntityT]
    asset_attr: str
    owner_attr: str
    prefix: str
    label: str
    too_large_message: str


POST_THUMBNAIL: AssetBinding[Post] = AssetBinding(
    model=Post,
    asset_attr="thumbnail",
    owner_attr="creator_id",
    prefix="thumbnails",
    label="Post",
    too_large_message="Thumbnail too big. File should be less than 2MB",
)

USER_AVATAR: AssetBinding[User] = AssetBinding(
    model=User,
    asset_attr="avatar",
    owner_attr="id",
    prefix="avatars",
    label="User",
    too_large_message="Profile Picture too big. Should be less than 500kb",
)


class AssetLinkedEntityManager(Generic[EntityT]):
    """Runs create/replace/delete flows for one kind of asset-linked entity.

    Attributes:
        session: Database session; the manager commits it at each durable step.
        storage: Blob storage service.
        binding: Entity/asset mapping.
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: StorageService,
        binding: AssetBinding[EntityT],
    ) -> None:
        self.session = session
        self.storage = storage
        self.binding = binding

    async def create_with_asset(
        self,
        entity: EntityT,
        asset: AssetUpload,
        max_bytes: int,
    ) -> EntityT:
        """Upload the asset, then persist the entity referencing it.

        Raises:
            SizeExceededError: Asset larger than max_bytes; nothing uploaded.
            UploadFailedError: Blob store failed; no record written.
            UpstreamError: Record write failed; the new blob is removed again.
        """
        self._check_size(asset, max_bytes)
        locator = await self._upload(asset)

        setattr(entity, self.binding.asset_attr, locator)
        self.session.add(entity)
        await self._commit_or_discard(locator)

        logger.info(f"{self.binding.label} created: {entity.id} -> {locator}")
        return entity

    async def replace_asset(
        self,
        entity_id: str,
        requester_id: str,
        asset: AssetUpload,
        max_bytes: int,
        fields: dict[str, Any] | None = None,
    ) -> EntityT:
        """Swap the entity's blob, optionally updating other fields in the same write.

        The previous blob is deleted only after the new reference is committed.

        Raises:
            NotFoundError: No such entity.
            ForbiddenError: Requester does not own the entity.
            SizeExceededError: Asset larger than max_bytes.
            UploadFailedError: Blob store failed; record untouched.
            UpstreamError: Record write failed; new blob removed, old blob kept.
        """
        entity = await self._load_owned(entity_id, requester_id)
        self._check_size(asset, max_bytes)

        previous = getattr(entity, self.binding.asset_attr)
        locator = await self._upload(asset)

        for name, value in (fields or {}).items():
            setattr(entity, name, value)
        setattr(entity, self.binding.asset_attr, locator)
        await self._commit_or_discard(locator)

        logger.info(f"{self.binding.label} {entity_id} asset replaced: {locator}")
        if previous and previous != locator:
            await self._discard(previous, "superseded")
        return entity

    async def delete_with_asset(self, entity_id: str, requester_id: str) -> EntityT:
        """Delete the record, then its blob.

        A blob that is already gone is not an error.

        Raises:
            NotFoundError: No such entity.
            ForbiddenError: Requester does not own the entity.
            UpstreamError: Record delete failed; blob untouched.
        """
        entity = await self._load_owned(entity_id, requester_id)
        locator = getattr(entity, self.binding.asset_attr)

        await self.session.delete(entity)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"{self.binding.label} {entity_id} delete failed: {e}")
            raise UpstreamError(f"{self.binding.label} couldn't be deleted.") from e

        logger.info(f"{self.binding.label} deleted: {entity_id}")
        await self._discard(locator, "owner deleted")
        return entity

    async def update_fields_only(
        self,
        entity_id: str,
        requester_id: str,
        fields: dict[str, Any],
    ) -> EntityT:
        """Ownership-checked update that leaves the blob alone.

        Raises:
            NotFoundError: No such entity.
            ForbiddenError: Requester does not own the entity.
            UpstreamError: Record write failed.
        """
        entity = await self._load_owned(entity_id, requester_id)
        for name, value in fields.items():
            setattr(entity, name, value)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"{self.binding.label} {entity_id} update failed: {e}")
            raise UpstreamError(f"Couldn't update {self.binding.label}.") from e
        return entity

    async def _load_owned(self, entity_id: str, requester_id: str) -> EntityT:
        entity = await self.session.get(self.binding.model, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.binding.label} not Found.")
        if getattr(entity, self.binding.owner_attr) != requester_id:
            logger.warning(
                f"{self.binding.label} {entity_id}: rejected mutation by {requester_id}"
            )
            raise ForbiddenError(
                f"Only the owner can modify this {self.binding.label.lower()}."
            )
        return entity

    def _check_size(self, asset: AssetUpload, max_bytes: int) -> None:
        if asset.size > max_bytes:
            raise SizeExceededError(self.binding.too_large_message)

    async def _upload(self, asset: AssetUpload) -> str:
        try:
            return await self.storage.upload(
                asset.data,
                asset.filename,
                asset.content_type,
                prefix=self.binding.prefix,
            )
        except StorageError as e:
            logger.error(f"{self.binding.label} asset upload failed: {e}")
            raise UploadFailedError(f"{self.binding.label} asset upload failed.") from e

    async def _commit_or_discard(self, locator: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"{self.binding.label} write failed after upload: {e}")
            await self._discard(locator, "record write failed")
            raise UpstreamError(f"{self.binding.label} couldn't be saved.") from e

    async def _discard(self, locator: str | None, reason: str) -> None:
        """Best-effort blob removal; never raises."""
        if not locator:
            return
        try:
            await self.storage.delete(locator)
        except Exception as e:
            logger.warning(f"Orphaned blob {locator} ({reason}): delete failed: {e}")
