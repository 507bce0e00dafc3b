"""SQLAlchemy models for BlogBliss.

Defines the two collections, users and posts, and the fixed set of post
categories.

Examples:
    >>> from blogbliss.models import Post, normalize_category
    >>> normalize_category("Sports")
    'Sports'
    >>> normalize_category("Gardening")
    'Uncategorized'

Tests:
    - tests/unit/test_models.py
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class PostCategory(str, Enum):
    """Categories a post may be filed under."""

    TECHNOLOGY = "Technology"
    LIFESTYLE = "Lifestyle"
    BUSINESS = "Business"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    SCIENCE_NATURE = "Science & Nature"
    SPORTS = "Sports"
    OPINION_EDITORIAL = "Opinion & Editorial"
    DIY_CRAFTS = "DIY & Crafts"
    FAMILY_PARENTING = "Family & Parenting"
    UNCATEGORIZED = "Uncategorized"


def normalize_category(value: str | None) -> str:
    """Map a raw category onto the fixed set, falling back to Uncategorized."""
    if value is None:
        return PostCategory.UNCATEGORIZED.value
    try:
        return PostCategory(value.strip()).value
    except ValueError:
        return PostCategory.UNCATEGORIZED.value


class User(Base):
    """Registered author.

    Attributes:
        id: Unique identifier (UUID)
        name: Display name
        email: Lowercased login email, unique
        password: bcrypt hash
        avatar: Locator of the avatar blob (bare key or full URL)
        posts: Denormalized number of posts, maintained best-effort
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password: Mapped[str] = mapped_column(String(128), nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text, default=None)
    posts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r})>"


class Post(Base):
    """Blog post with a mandatory thumbnail blob.

    Attributes:
        id: Unique identifier (UUID)
        title: Post title
        category: One of PostCategory values
        description: Post body
        thumbnail: Locator of the thumbnail blob (bare key or full URL)
        creator_id: Owning user id
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[str] = mapped_column(
        String(50), default=PostCategory.UNCATEGORIZED.value, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail: Mapped[str] = mapped_column(Text, nullable=False)
    creator_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, index=True
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id!r}, title={self.title!r})>"
