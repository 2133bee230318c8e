"""Shared pytest fixtures for API tests and database isolation."""

from __future__ import annotations

import os

os.environ.setdefault("STATE_SECRET_KEY", "test-state-secret")
os.environ.setdefault("SPOTIFY_CLIENT_ID", "test-client-id")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "test-client-secret")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.engine import make_url  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from dynamicplaylist.api.deps import get_db  # noqa: E402
from dynamicplaylist.core.config import settings  # noqa: E402
from dynamicplaylist.db.base import Base  # noqa: E402
from dynamicplaylist.main import app  # noqa: E402

IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture()
async def session() -> AsyncSession:
    database_url = settings.test_database_url or IN_MEMORY_DATABASE_URL
    url = make_url(database_url)
    if url.drivername.startswith("sqlite"):
        # A single shared connection keeps the in-memory database alive for the test.
        engine = create_async_engine(
            database_url,
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(database_url, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    TestingSession = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    try:
        async with TestingSession() as session:
            yield session
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(session: AsyncSession) -> AsyncClient:
    async def _get_test_db():
        yield session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.pop(get_db, None)
