"""API module for BlogBliss.

All routes are mounted under ``/api``.
"""

from fastapi import APIRouter

from blogbliss.api.posts import router as posts_router
from blogbliss.api.users import router as users_router

router = APIRouter(prefix="/api")
router.include_router(users_router)
router.include_router(posts_router)

__all__ = ["router"]
