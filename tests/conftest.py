import os
from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

os.environ.setdefault("JSON_LOGS", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from catalog.api.dependencies import get_store  # noqa: E402
from catalog.crud.store import CatalogStore  # noqa: E402
from catalog.db.models import Category, Item  # noqa: E402
from catalog.db.session import Base, build_engine, build_session_factory, get_db  # noqa: E402
from catalog.main import app  # noqa: E402


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    url = os.environ.get("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'catalog_test.db'}"
    test_engine = build_engine(url)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def store(db_engine: AsyncEngine) -> CatalogStore:
    return CatalogStore(build_session_factory(db_engine))


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with build_session_factory(db_engine)() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def audio(store: CatalogStore) -> Category:
    return await store.categories.create(name="Audio", description="Speakers and headphones")


@pytest_asyncio.fixture(scope="function")
async def speaker(store: CatalogStore, audio: Category) -> Item:
    return await store.items.create(
        name="Speaker",
        description="Loud",
        price=50.0,
        number_in_stock=3,
        category_id=audio.id,
    )


@pytest_asyncio.fixture(scope="function")
async def client(store: CatalogStore, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
