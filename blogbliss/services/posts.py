"""Post lifecycle service.

Thin layer over :class:`AssetLinkedEntityManager` that adds field
validation, read queries and maintenance of the author's post counter.

The counter is a separate, non-transactional update: it runs after the post
write has committed, and a failure there is logged and ignored. It can
therefore drift from the real number of posts; see
``UserService.recount_posts`` for reconciliation.
"""

from __future__ import annotations

import logging

from sqlalchemy import case, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogbliss.config import Settings
from blogbliss.core.assets import POST_THUMBNAIL, AssetLinkedEntityManager, AssetUpload
from blogbliss.errors import NotFoundError, ValidationError
from blogbliss.models import Post, User, normalize_category
from blogbliss.storage.service import StorageService

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


def _has_data(upload: AssetUpload | None) -> bool:
    return upload is not None and upload.size > 0


class PostService:
    """Create, read, edit and delete posts.

    Attributes:
        session: Database session.
        storage: Blob storage service.
        settings: Application settings (upload limits).
    """

    def __init__(self, session: AsyncSession, storage: StorageService, settings: Settings) -> None:
        self.session = session
        self.storage = storage
        self.settings = settings
        self.assets = AssetLinkedEntityManager(session, storage, POST_THUMBNAIL)

    async def create_post(
        self,
        creator: User,
        title: str | None,
        category: str | None,
        description: str | None,
        thumbnail: AssetUpload | None,
    ) -> Post:
        """Create a post with its thumbnail and bump the author's counter."""
        title, description = _clean(title), _clean(description)
        if not title or not _clean(category) or not description or not _has_data(thumbnail):
            raise ValidationError("Fill in all fields and Choose Thumbnail.")

        post = Post(
            title=title,
            category=normalize_category(category),
            description=description,
            creator_id=creator.id,
        )
        post = await self.assets.create_with_asset(
            post, thumbnail, max_bytes=self.settings.MAX_THUMBNAIL_BYTES
        )
        # Detached so the committed post stays readable if the counter update rolls back.
        self.session.expunge(post)
        await self._adjust_post_count(creator.id, +1)
        return post

    async def list_posts(self) -> list[Post]:
        """All posts, most recently updated first."""
        result = await self.session.execute(select(Post).order_by(Post.updated_at.desc()))
        return list(result.scalars().all())

    async def get_post(self, post_id: str) -> Post:
        post = await self.session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not Found.")
        return post

    async def list_by_category(self, category: str) -> list[Post]:
        """Posts in one category, newest first."""
        result = await self.session.execute(
            select(Post).where(Post.category == category).order_by(Post.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_by_creator(self, user_id: str) -> list[Post]:
        """Posts written by one author, newest first."""
        result = await self.session.execute(
            select(Post).where(Post.creator_id == user_id).order_by(Post.created_at.desc())
        )
        return list(result.scalars().all())

    async def edit_post(
        self,
        post_id: str,
        requester: User,
        title: str | None,
        category: str | None,
        description: str | None,
        thumbnail: AssetUpload | None = None,
    ) -> Post:
        """Update text fields and, when a non-empty thumbnail is supplied, swap it.

        Only the creator may edit, with or without a new thumbnail.
        """
        title, description = _clean(title), _clean(description)
        if not title or not _clean(category) or not description:
            raise ValidationError("Fill in all fields.")

        fields = {
            "title": title,
            "category": normalize_category(category),
            "description": description,
        }
        if not _has_data(thumbnail):
            return await self.assets.update_fields_only(post_id, requester.id, fields)
        return await self.assets.replace_asset(
            post_id,
            requester.id,
            thumbnail,
            max_bytes=self.settings.MAX_THUMBNAIL_BYTES,
            fields=fields,
        )

    async def delete_post(self, post_id: str, requester: User) -> Post:
        """Delete a post and its thumbnail, then decrement the author's counter."""
        post = await self.assets.delete_with_asset(post_id, requester.id)
        await self._adjust_post_count(post.creator_id, -1)
        return post

    async def _adjust_post_count(self, user_id: str, delta: int) -> None:
        """Best-effort atomic counter update, never going below zero."""
        new_value = User.posts + delta
        try:
            await self.session.execute(
                update(User)
                .where(User.id == user_id)
                .values(posts=case((new_value < 0, 0), else_=new_value))
                .execution_options(synchronize_session=False)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(f"Post counter for user {user_id} not adjusted by {delta}: {e}")
