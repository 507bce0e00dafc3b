"""JWT access token management.

Access tokens: HS256, payload ``{id, name}`` plus ``iat``/``exp``,
lifetime ``JWT_EXPIRE_DAYS`` (1 day by default).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from blogbliss.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by an access token."""

    id: str
    name: str


def create_access_token(user_id: str, name: str) -> str:
    """Create a signed access token.

    Args:
        user_id: The user's UUID.
        name: The user's display name.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "name": name,
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRE_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm="HS256")


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate an access token.

    Raises:
        ValueError: If token is invalid or expired.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=["HS256"],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise ValueError("Access token has expired")
    except jwt.InvalidTokenError as e:
        raise ValueError(f"Invalid access token: {e}")

    user_id = payload.get("id")
    if not user_id:
        raise ValueError("Token missing user id")
    return TokenClaims(id=user_id, name=payload.get("name", ""))
