from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from api.v1.dependencies import security
from api.v1.utils.jwt_utils import sign_jwt
from shared.database import enable_sqlite_foreign_keys
from shared.models import User

# In-memory database for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret"


@pytest_asyncio.fixture
async def db_session_factory() -> AsyncGenerator[
    async_sessionmaker[AsyncSession], None
]:
    """
    A fresh database and session factory per test.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async with factory() as session:
        session.add_all(
            [
                User(id=1, email="rin@example.com", username="rin", avatar="3"),
                User(id=2, email="kai@example.com", username="kai", avatar="7"),
                User(id=3, email="mio@example.com", username="mio"),
            ]
            + [
                User(id=i, email=f"viewer{i}@example.com", username=f"viewer{i}")
                for i in range(4, 9)
            ]
        )
        await session.commit()

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with db_session_factory() as session:
        yield session


def _auth_headers(user_id: int) -> dict:
    token = sign_jwt({"userId": user_id}, TEST_JWT_SECRET, 3600)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    """Builds Authorization headers for a user id."""
    return _auth_headers


@pytest_asyncio.fixture
async def client(
    db_session_factory: async_sessionmaker[AsyncSession], monkeypatch
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    HTTP client bound to the ASGI app, with every router talking to the
    test database.
    """
    from api.main import app
    from api.v1.routers import favorites, history, reviews, watchlist

    for module in (reviews, favorites, watchlist, history):
        monkeypatch.setattr(module, "AsyncSessionFactory", db_session_factory)
    monkeypatch.setattr(security, "_JWT_SECRET", TEST_JWT_SECRET)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
