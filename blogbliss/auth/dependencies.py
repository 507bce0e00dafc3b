"""FastAPI dependencies for authentication."""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogbliss.auth.jwt_handler import decode_access_token
from blogbliss.database import get_db_session
from blogbliss.errors import AuthError
from blogbliss.models import User

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the calling user from the ``Authorization: Bearer`` header.

    Raises:
        AuthError: Header missing, token invalid or expired, or the user
            no longer exists.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise AuthError("Unauthorized. No token")

    token = auth_header[len("Bearer "):]
    try:
        claims = decode_access_token(token)
    except ValueError as e:
        raise AuthError(f"Unauthorized. {e}")

    user = await session.get(User, claims.id)
    if user is None:
        logger.info(f"Token presented for unknown user {claims.id}")
        raise AuthError("Unauthorized. User not found")
    return user
