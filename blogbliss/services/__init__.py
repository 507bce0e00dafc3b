"""Request-level services for posts and user accounts."""

from blogbliss.services.posts import PostService
from blogbliss.services.users import UserService

__all__ = ["PostService", "UserService"]
