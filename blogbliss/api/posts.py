"""Post API endpoints.

Endpoints:
    POST   /api/posts                       - Create a post with thumbnail (multipart)
    GET    /api/posts                       - List posts, most recently updated first
    GET    /api/posts/categories/{category} - List posts in a category
    GET    /api/posts/users/{id}            - List posts by an author
    GET    /api/posts/{id}                  - Get a post
    PATCH  /api/posts/{id}                  - Edit a post, optionally swapping the thumbnail
    DELETE /api/posts/{id}                  - Delete a post and its thumbnail

Tests:
    - tests/integration/test_api_posts.py
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from blogbliss.auth.dependencies import get_current_user
from blogbliss.config import Settings, get_settings
from blogbliss.dependencies import get_post_service, get_storage_service, read_upload
from blogbliss.models import User
from blogbliss.schemas import MessageResponse, PostResponse, post_to_response
from blogbliss.services.posts import PostService
from blogbliss.storage.service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    title: str | None = Form(None),
    category: str | None = Form(None),
    description: str | None = Form(None),
    thumbnail: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings),
) -> PostResponse:
    upload = await read_upload(thumbnail, settings.MAX_THUMBNAIL_BYTES)
    post = await posts.create_post(current_user, title, category, description, upload)
    return post_to_response(post, storage)


@router.get("", response_model=list[PostResponse])
async def get_posts(
    posts: PostService = Depends(get_post_service),
    storage: StorageService = Depends(get_storage_service),
) -> list[PostResponse]:
    return [post_to_response(p, storage) for p in await posts.list_posts()]


@router.get("/categories/{category}", response_model=list[PostResponse])
async def get_category_posts(
    category: str,
    posts: PostService = Depends(get_post_service),
    storage: StorageService = Depends(get_storage_service),
) -> list[PostResponse]:
    return [post_to_response(p, storage) for p in await posts.list_by_category(category)]


@router.get("/users/{user_id}", response_model=list[PostResponse])
async def get_user_posts(
    user_id: str,
    posts: PostService = Depends(get_post_service),
    storage: StorageService = Depends(get_storage_service),
) -> list[PostResponse]:
    return [post_to_response(p, storage) for p in await posts.list_by_creator(user_id)]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    _user: User = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
    storage: StorageService = Depends(get_storage_service),
) -> PostResponse:
    return post_to_response(await posts.get_post(post_id), storage)


@router.patch("/{post_id}", response_model=PostResponse)
async def edit_post(
    post_id: str,
    title: str | None = Form(None),
    category: str | None = Form(None),
    description: str | None = Form(None),
    thumbnail: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings),
) -> PostResponse:
    upload = await read_upload(thumbnail, settings.MAX_THUMBNAIL_BYTES)
    post = await posts.edit_post(post_id, current_user, title, category, description, upload)
    return post_to_response(post, storage)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
) -> MessageResponse:
    await posts.delete_post(post_id, current_user)
    logger.info(f"Post {post_id} deleted by {current_user.id}")
    return MessageResponse(message=f"Post {post_id} Deleted Successfully")
