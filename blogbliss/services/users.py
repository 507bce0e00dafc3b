"""User account service - registration, login, profile and avatar."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogbliss.auth.jwt_handler import create_access_token
from blogbliss.auth.passwords import MAX_PASSWORD_BYTES, hash_password, verify_password
from blogbliss.config import Settings
from blogbliss.core.assets import USER_AVATAR, AssetLinkedEntityManager, AssetUpload
from blogbliss.errors import AuthError, NotFoundError, UpstreamError, ValidationError
from blogbliss.models import Post, User
from blogbliss.storage.service import StorageService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
INVALID_CREDENTIALS = "Invalid Credentials."


def normalize_email(email: str) -> str:
    return email.strip().lower()


def check_new_password(password: str, confirmation: str | None, mismatch_message: str) -> None:
    """Apply the password rules shared by registration and profile edits."""
    if len(password.strip()) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password should be at least {MIN_PASSWORD_LENGTH} Characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password should be at most {MAX_PASSWORD_BYTES} bytes")
    if password != confirmation:
        raise ValidationError(mismatch_message)


class UserService:
    """Account operations.

    Attributes:
        session: Database session.
        settings: Application settings (avatar limit).
        assets: Avatar manager.
    """

    def __init__(self, session: AsyncSession, storage: StorageService, settings: Settings) -> None:
        self.session = session
        self.settings = settings
        self.assets = AssetLinkedEntityManager(session, storage, USER_AVATAR)

    async def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        confirm_password: str | None,
    ) -> User:
        email = normalize_email(email or "")
        if not name or not name.strip() or not email or not password or not confirm_password:
            raise ValidationError("Fill In All Fields")

        if await self._find_by_email(email) is not None:
            raise ValidationError("Email already Exists")
        check_new_password(password, confirm_password, "Passwords Do Not Match")

        user = User(name=name.strip(), email=email, password=await hash_password(password))
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email.
            await self.session.rollback()
            raise ValidationError("Email already Exists")

        logger.info(f"User registered: {user.id} <{email}>")
        return user

    async def login(self, email: str | None, password: str | None) -> tuple[str, User]:
        """Verify credentials and issue an access token.

        Unknown email and wrong password raise the same error.

        Returns:
            (token, user)
        """
        if not email or not password:
            raise ValidationError("Fill in all Fields")

        user = await self._find_by_email(normalize_email(email))
        if user is None or not await verify_password(password, user.password):
            raise AuthError(INVALID_CREDENTIALS, status_code=422)

        return create_access_token(user.id, user.name), user

    async def get_user(self, user_id: str) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User Not Found")
        return user

    async def list_authors(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def change_avatar(self, user: User, avatar: AssetUpload | None) -> User:
        """Replace the user's avatar; the old one is removed after the swap."""
        if avatar is None or avatar.size == 0:
            raise ValidationError("Please Choose An Image.")
        return await self.assets.replace_asset(
            user.id, user.id, avatar, max_bytes=self.settings.MAX_AVATAR_BYTES
        )

    async def edit_user(
        self,
        user: User,
        name: str | None,
        email: str | None,
        current_password: str | None,
        new_password: str | None = None,
        confirm_new_password: str | None = None,
    ) -> User:
        """Change name, email and optionally password after re-authentication."""
        email = normalize_email(email or "")
        if not name or not name.strip() or not email or not current_password:
            raise ValidationError("Fill in all Fields")

        existing = await self._find_by_email(email)
        if existing is not None and existing.id != user.id:
            raise ValidationError("Email already Exist.")

        if not await verify_password(current_password, user.password):
            raise ValidationError("Invalid Current Password.")

        if new_password:
            check_new_password(new_password, confirm_new_password, "New Passwords do not Match.")
            user.password = await hash_password(new_password)

        user.name = name.strip()
        user.email = email
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValidationError("Email already Exist.")
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise UpstreamError("User couldn't be updated.") from e

        logger.info(f"User updated: {user.id}")
        return user

    async def recount_posts(self, user_id: str) -> int:
        """Reset the denormalized counter to the actual number of posts."""
        user = await self.get_user(user_id)
        result = await self.session.execute(
            select(func.count()).select_from(Post).where(Post.creator_id == user_id)
        )
        user.posts = result.scalar() or 0
        await self.session.commit()
        return user.posts

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
