"""Unit tests for database models.

Tests for blogbliss/models.py - User, Post and categories.

Run with:
    pytest tests/unit/test_models.py -v
    pytest tests/unit/test_models.py -v -m fast
"""

import pytest
from sqlalchemy.exc import IntegrityError

from blogbliss.models import Post, PostCategory, User, normalize_category


@pytest.mark.fast
class TestPostCategory:
    """Tests for PostCategory enum."""

    def test_category_values(self):
        assert PostCategory.SCIENCE_NATURE.value == "Science & Nature"
        assert PostCategory.UNCATEGORIZED.value == "Uncategorized"
        assert len(PostCategory) == 11

    def test_is_string_enum(self):
        assert isinstance(PostCategory.SPORTS.value, str)


@pytest.mark.fast
class TestNormalizeCategory:
    """Tests for normalize_category()."""

    def test_known(self):
        assert normalize_category("DIY & Crafts") == "DIY & Crafts"

    def test_surrounding_whitespace(self):
        assert normalize_category("  Sports ") == "Sports"

    def test_unknown_falls_back(self):
        assert normalize_category("Gardening") == "Uncategorized"

    def test_case_sensitive(self):
        assert normalize_category("sports") == "Uncategorized"

    def test_none(self):
        assert normalize_category(None) == "Uncategorized"


class TestPersistence:
    """Round trips through the in-memory database."""

    @pytest.mark.asyncio
    async def test_user_defaults(self, make_user):
        user = await make_user("Ann", "ann@x.com")
        assert len(user.id) == 36
        assert user.posts == 0
        assert user.avatar is None
        assert user.created_at is not None

    @pytest.mark.asyncio
    async def test_email_unique(self, db_session, make_user):
        await make_user("Ann", "ann@x.com")
        db_session.add(User(name="Other", email="ann@x.com", password="x"))
        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_post_defaults(self, db_session, make_user):
        user = await make_user("Ann", "ann@x.com")
        post = Post(title="Hi", description="Body", thumbnail="thumbnails/a.png", creator_id=user.id)
        db_session.add(post)
        await db_session.commit()

        assert post.category == "Uncategorized"
        assert post.created_at is not None
        assert post.updated_at is not None

    def test_repr(self):
        assert "ann@x.com" in repr(User(id="u1", name="Ann", email="ann@x.com", password="x"))
        assert "Hi" in repr(Post(id="p1", title="Hi"))
