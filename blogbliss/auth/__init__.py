"""Auth module - password hashing, access tokens and the current-user dependency."""

from blogbliss.auth.dependencies import get_current_user
from blogbliss.auth.jwt_handler import TokenClaims, create_access_token, decode_access_token
from blogbliss.auth.passwords import hash_password, verify_password

__all__ = [
    "TokenClaims",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "hash_password",
    "verify_password",
]
