import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import app.models  # noqa: F401 - register all tables on Base.metadata
from app.db.base import Base
from app.db.session import get_db
from app.main import app


@pytest.fixture
def client():
    async def fake_db():
        yield object()

    app.dependency_overrides[get_db] = fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def session_maker(tmp_path):
    """Session factory on a throwaway SQLite file with every table created."""
    # NullPool: each TestClient request runs on its own event loop
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gymseven.db'}", poolclass=NullPool)

    async def create_all():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_all())
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def db_client(session_maker):
    """TestClient whose get_db yields sessions on the SQLite database."""

    async def sqlite_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = sqlite_db
    yield TestClient(app)
    app.dependency_overrides.clear()
