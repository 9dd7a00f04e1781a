import pytest

from catalog.crud.store import CatalogStore
from catalog.db.session import build_engine, build_session_factory
from catalog.scripts.populate_db import SAMPLE_CATEGORIES, SAMPLE_ITEMS, main, populate



@pytest.mark.asyncio
async def test_populate_inserts_sample_data(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}"

    category_count, item_count = await populate(url)

    assert (category_count, item_count) == (len(SAMPLE_CATEGORIES), len(SAMPLE_ITEMS))
    engine = build_engine(url)
    try:
        store = CatalogStore(build_session_factory(engine))
        gadgets = await store.categories.get_by_name("Gadgets")
        watches = await store.items.list_by_category(gadgets.id)
        assert sorted(i.name for i in watches) == ["Apple watch SE", "Apple watch Series 9", "Apple watch Ultra 2"]
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_populate_twice_reuses_categories_and_items(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}"

    await populate(url)
    await populate(url)

    engine = build_engine(url)
    try:
        store = CatalogStore(build_session_factory(engine))
        assert await store.categories.count() == len(SAMPLE_CATEGORIES)
        assert await store.items.count() == len(SAMPLE_ITEMS)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_populate_with_reset_starts_over(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}"

    await populate(url)
    await populate(url, reset=True)

    engine = build_engine(url)
    try:
        store = CatalogStore(build_session_factory(engine))
        assert await store.items.count() == len(SAMPLE_ITEMS)
    finally:
        await engine.dispose()


def test_main_parses_arguments(tmp_path, monkeypatch):
    calls = {}

    async def fake_populate(database_url, reset=False):
        calls["args"] = (database_url, reset)
        return 0, 0

    monkeypatch.setattr("catalog.scripts.populate_db.populate", fake_populate)
    monkeypatch.setattr("catalog.scripts.populate_db.configure_logging", lambda: None)

    main(["--database-url", "sqlite+aiosqlite:///x.db", "--reset"])

    assert calls["args"] == ("sqlite+aiosqlite:///x.db", True)
