"""Pytest configuration and fixtures."""
from typing import Callable, Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from constants.role_permission_defaults import Role
from db.models import Base, BlogPost, RoleAccess, User
from db.sessions.database import get_db
from main import app
from utils.auth import create_jwt_token


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite database, fresh for every test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the app, with get_db bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sample_users(session_factory) -> Dict[str, User]:
    """One user per role."""
    users = {
        Role.ADMIN.value: User(user_id="admin0000001", email="ada@example.com", name="Ada Admin", role="admin"),
        Role.EDITOR.value: User(user_id="editor000001", email="ed@example.com", name="Ed Itor", role="editor"),
        Role.VIEWER.value: User(user_id="viewer000001", email="vi@example.com", name="Vi", role="viewer"),
    }
    async with session_factory() as session:
        session.add_all(users.values())
        await session.commit()
    return users


@pytest_asyncio.fixture
async def sample_posts(session_factory, sample_users) -> Dict[str, BlogPost]:
    posts = {
        "admin": BlogPost(
            post_id="post00000001",
            title="Admin announcement",
            content="Hello from the admin.",
            author_id=sample_users["admin"].user_id,
            author_name="Ada Admin",
            author_email="ada@example.com",
            published=True,
        ),
        "editor": BlogPost(
            post_id="post00000002",
            title="Editor draft",
            content="Work in progress.",
            author_id=sample_users["editor"].user_id,
            author_name="Ed Itor",
            author_email="ed@example.com",
            published=False,
        ),
    }
    async with session_factory() as session:
        session.add_all(posts.values())
        await session.commit()
    return posts


@pytest_asyncio.fixture
async def store_access(session_factory) -> Callable:
    """Insert a raw role access row, bypassing the service layer."""

    async def _store(role: str, page: str, **flags: bool) -> None:
        async with session_factory() as session:
            session.add(
                RoleAccess(
                    role=role,
                    page=page,
                    page_name=page,
                    can_view=flags.get("can_view", True),
                    can_add=flags.get("can_add", False),
                    can_edit=flags.get("can_edit", False),
                    can_delete=flags.get("can_delete", False),
                )
            )
            await session.commit()

    return _store


@pytest.fixture
def auth_headers() -> Callable[..., Dict[str, str]]:
    """Build an Authorization header for a user as the auth provider would."""

    def _headers(user: Optional[User] = None, role: Optional[str] = None, **claims) -> Dict[str, str]:
        payload = {
            "user_id": user.user_id if user else claims.pop("user_id", "someone0001"),
            "role": role or (user.role if user else "viewer"),
            "email": user.email if user else "someone@example.com",
            "name": user.name if user else "Someone",
            **claims,
        }
        return {"Authorization": f"Bearer {create_jwt_token(payload)}"}

    return _headers
