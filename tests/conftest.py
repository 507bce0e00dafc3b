"""
Pytest configuration and fixtures for BlogBliss tests.

Every test gets its own in-memory SQLite database and a local blob store
under ``tmp_path``; no network or external services are touched.
"""
import os

# Must be set before blogbliss.config is imported anywhere.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("STORAGE_BACKEND", "local")

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from blogbliss.auth.passwords import hash_password
from blogbliss.config import Settings, get_settings
from blogbliss.database import get_db_session
from blogbliss.dependencies import get_storage_service
from blogbliss.main import app
from blogbliss.models import Base, User
from blogbliss.storage.config import StorageConfig
from blogbliss.storage.service import StorageService

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


# ============================================
# Database
# ============================================

@pytest.fixture
async def db_engine():
    """In-memory SQLite engine shared by all sessions of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ============================================
# Collaborators
# ============================================

@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(storage_root) -> StorageService:
    """Local-backend storage writing under tmp_path."""
    return StorageService(StorageConfig(root=str(storage_root), public_base_url="/uploads"))


@pytest.fixture
def stored_files(storage_root):
    """Callable returning the keys currently present in the blob store."""
    def _list() -> set[str]:
        if not storage_root.exists():
            return set()
        return {
            p.relative_to(storage_root).as_posix()
            for p in storage_root.rglob("*")
            if p.is_file()
        }
    return _list


@pytest.fixture
def make_png():
    """Factory for bytes that look like a PNG, padded to a given size."""
    def _make(size: int = 128) -> bytes:
        return PNG_HEADER + b"\x00" * max(size - len(PNG_HEADER), 0)
    return _make


@pytest.fixture
def make_user(db_session):
    """Factory inserting a user with a real bcrypt hash."""
    async def _make(name: str = "Ann", email: str = "ann@x.com", password: str = "password1") -> User:
        user = User(name=name, email=email, password=await hash_password(password))
        db_session.add(user)
        await db_session.commit()
        return user
    return _make


# ============================================
# HTTP client
# ============================================

@pytest.fixture
async def client(session_factory, storage) -> AsyncGenerator[AsyncClient, None]:
    """ASGI client with database and storage dependencies overridden."""
    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_storage_service] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client):
    """Register an account through the API and return ``(user_id, headers)``."""
    async def _go(name: str = "Ann", email: str = "ann@x.com", password: str = "password1"):
        response = await client.post(
            "/api/users/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "confirmPassword": password,
            },
        )
        assert response.status_code == 201, response.text

        response = await client.post(
            "/api/users/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        data = response.json()
        return data["id"], {"Authorization": f"Bearer {data['token']}"}
    return _go


# ============================================
# Pytest Configuration
# ============================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "fast: Fast unit tests (no external services)"
    )
    config.addinivalue_line(
        "markers", "integration: HTTP-level tests through the ASGI app"
    )
