"""Pydantic request and response schemas for the HTTP API.

Request bodies accept the camelCase keys the web client sends
(``confirmPassword``) as well as snake_case names. Every field is optional
at the schema level so that missing fields are reported through the
services' own validation messages.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from blogbliss.models import Post, User
from blogbliss.storage.service import StorageService


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(_Request):
    """Body of POST /users/register."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = Field(default=None, alias="confirmPassword")


class LoginRequest(_Request):
    """Body of POST /users/login."""

    email: str | None = None
    password: str | None = None


class EditUserRequest(_Request):
    """Body of PATCH /users/edit-user."""

    name: str | None = None
    email: str | None = None
    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")
    confirm_new_password: str | None = Field(default=None, alias="confirmNewPassword")


class TokenResponse(BaseModel):
    """Issued access token and the identity it carries."""

    token: str
    id: str
    name: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class UserResponse(BaseModel):
    """Public user profile (never includes the password hash)."""

    id: str
    name: str
    email: str
    avatar: str | None = None
    posts: int = 0
    created_at: datetime | None = None


class PostResponse(BaseModel):
    """Post with its thumbnail rendered as a fetchable URL."""

    id: str
    title: str
    category: str
    description: str
    thumbnail: str | None = None
    creator: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


def user_to_response(user: User, storage: StorageService) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=storage.display_url(user.avatar),
        posts=user.posts or 0,
        created_at=user.created_at,
    )


def post_to_response(post: Post, storage: StorageService) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        category=post.category,
        description=post.description,
        thumbnail=storage.display_url(post.thumbnail),
        creator=post.creator_id,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )
