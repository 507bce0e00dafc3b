"""Password hashing with bcrypt.

bcrypt is CPU-bound, so hashing and verification run in a worker thread.
bcrypt only considers the first 72 bytes of a password; longer inputs are
rejected upstream by the account rules.
"""

from __future__ import annotations

import asyncio

import bcrypt

from blogbliss.config import get_settings

MAX_PASSWORD_BYTES = 72


def _hash(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def _verify(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
    except ValueError:
        # Malformed stored hash or over-long password.
        return False


async def hash_password(password: str) -> str:
    """Hash a password with the configured cost factor."""
    return await asyncio.to_thread(_hash, password, get_settings().BCRYPT_ROUNDS)


async def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    return await asyncio.to_thread(_verify, password, hashed)
