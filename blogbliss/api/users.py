"""User API endpoints.

Endpoints:
    POST  /api/users/register      - Create an account
    POST  /api/users/login         - Exchange credentials for an access token
    GET   /api/users/authors       - List all authors
    POST  /api/users/change-avatar - Replace the caller's avatar (multipart)
    PATCH /api/users/edit-user     - Change the caller's name, email or password
    GET   /api/users/{id}          - Get a user profile

Tests:
    - tests/integration/test_api_users.py
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status

from blogbliss.auth.dependencies import get_current_user
from blogbliss.config import Settings, get_settings
from blogbliss.dependencies import get_storage_service, get_user_service, read_upload
from blogbliss.models import User
from blogbliss.schemas import (
    EditUserRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    user_to_response,
)
from blogbliss.services.users import UserService
from blogbliss.storage.service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: RegisterRequest,
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    user = await users.register(
        request.name, request.email, request.password, request.confirm_password
    )
    return MessageResponse(message=f"New User {user.email} registered")


@router.post("/login", response_model=TokenResponse)
async def login_user(
    request: LoginRequest,
    users: UserService = Depends(get_user_service),
) -> TokenResponse:
    token, user = await users.login(request.email, request.password)
    return TokenResponse(token=token, id=user.id, name=user.name)


@router.get("/authors", response_model=list[UserResponse])
async def get_authors(
    users: UserService = Depends(get_user_service),
    storage: StorageService = Depends(get_storage_service),
) -> list[UserResponse]:
    return [user_to_response(u, storage) for u in await users.list_authors()]


@router.post("/change-avatar", response_model=UserResponse)
async def change_avatar(
    avatar: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    upload = await read_upload(avatar, settings.MAX_AVATAR_BYTES)
    user = await users.change_avatar(current_user, upload)
    return user_to_response(user, storage)


@router.patch("/edit-user", response_model=UserResponse)
async def edit_user(
    request: EditUserRequest,
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
    storage: StorageService = Depends(get_storage_service),
) -> UserResponse:
    user = await users.edit_user(
        current_user,
        request.name,
        request.email,
        request.current_password,
        request.new_password,
        request.confirm_new_password,
    )
    return user_to_response(user, storage)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
    storage: StorageService = Depends(get_storage_service),
) -> UserResponse:
    return user_to_response(await users.get_user(user_id), storage)
