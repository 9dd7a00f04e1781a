"""
Tests for the item pages and the catalog home page.
"""

import pytest
from httpx import AsyncClient

from catalog.crud.store import CatalogStore
from catalog.db.models import Category, Item

pytestmark = pytest.mark.asyncio


async def test_root_redirects_to_catalog(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 303
    assert response.headers["location"] == "/catalog"


async def test_home_page_shows_counts(client: AsyncClient, audio: Category, speaker: Item):
    response = await client.get("/catalog")

    assert response.status_code == 200
    assert "<strong>Categories:</strong> 1" in response.text
    assert "<strong>Items:</strong> 1" in response.text


async def test_item_list_page(client: AsyncClient, audio: Category, speaker: Item):
    response = await client.get("/catalog/items")

    assert response.status_code == 200
    assert f'href="/catalog/item/{speaker.id}"' in response.text
    assert "Audio" in response.text


async def test_create_item_and_view_detail(client: AsyncClient, store: CatalogStore, audio: Category):
    form_page = await client.get("/catalog/item/create")
    assert f'value="{audio.id}"' in form_page.text

    response = await client.post(
        "/catalog/item/create",
        data={
            "name": "Speaker",
            "description": "Loud",
            "price": "50",
            "number_in_stock": "3",
            "category": str(audio.id),
        },
    )

    assert response.status_code == 303
    detail = await client.get(response.headers["location"])
    assert detail.status_code == 200
    assert "Item: Speaker" in detail.text
    assert f'href="/catalog/category/{audio.id}">Audio</a>' in detail.text
    assert await store.items.count() == 1


async def test_create_item_with_empty_description_is_rejected(
    client: AsyncClient, store: CatalogStore, audio: Category
):
    response = await client.post(
        "/catalog/item/create",
        data={
            "name": "Speaker",
            "description": "",
            "price": "50",
            "number_in_stock": "3",
            "category": str(audio.id),
        },
    )

    assert response.status_code == 200
    assert "Description must not be empty." in response.text
    assert f'<option value="{audio.id}" selected>' in response.text
    assert await store.items.count() == 0


async def test_create_item_with_stock_beyond_column_range_is_rejected(
    client: AsyncClient, store: CatalogStore, audio: Category
):
    response = await client.post(
        "/catalog/item/create",
        data={
            "name": "Speaker",
            "description": "Loud",
            "price": "50",
            "number_in_stock": "99999999999999999999",
            "category": str(audio.id),
        },
    )

    assert response.status_code == 200
    assert "Number in stock must be a non-negative whole number" in response.text
    assert await store.items.count() == 0


@pytest.mark.parametrize("item_id", ["123456", "99999999999999999999"])
async def test_item_detail_missing_renders_404_page(client: AsyncClient, item_id: str):
    response = await client.get(f"/catalog/item/{item_id}")

    assert response.status_code == 404
    assert "Item not found" in response.text


async def test_update_item_round_trip(client: AsyncClient, store: CatalogStore, audio: Category, speaker: Item):
    form_page = await client.get(f"/catalog/item/{speaker.id}/update")
    assert 'value="Speaker"' in form_page.text
    assert f'<option value="{audio.id}" selected>' in form_page.text

    response = await client.post(
        f"/catalog/item/{speaker.id}/update",
        data={
            "name": "Speaker Pro",
            "description": "Louder",
            "price": "65.5",
            "number_in_stock": "4",
            "category": str(audio.id),
        },
    )

    assert response.status_code == 303
    assert response.headers["location"] == f"/catalog/item/{speaker.id}"
    updated = await store.items.get(speaker.id)
    assert (updated.name, updated.description, updated.price, updated.number_in_stock) == (
        "Speaker Pro",
        "Louder",
        65.5,
        4,
    )


async def test_delete_item(client: AsyncClient, store: CatalogStore, speaker: Item):
    confirm = await client.get(f"/catalog/item/{speaker.id}/delete")
    assert "Do you really want to delete this item?" in confirm.text

    response = await client.post(f"/catalog/item/{speaker.id}/delete")

    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/items"
    assert await store.items.count() == 0


@pytest.mark.parametrize("method", ["get", "post"])
@pytest.mark.parametrize("item_id", ["not-an-id", "99999999999999999999"])
async def test_delete_missing_item_redirects(client: AsyncClient, method: str, item_id: str):
    response = await getattr(client, method)(f"/catalog/item/{item_id}/delete")

    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/items"


async def test_scenario_category_delete_blocked_by_item(client: AsyncClient, store: CatalogStore):
    created = await client.post("/catalog/category/create", data={"name": "Audio"})
    category_id = created.headers["location"].rsplit("/", 1)[-1]
    await client.post(
        "/catalog/item/create",
        data={
            "name": "Speaker",
            "description": "Loud",
            "price": "50",
            "number_in_stock": "3",
            "category": category_id,
        },
    )

    response = await client.post(f"/catalog/category/{category_id}/delete")

    assert response.status_code == 200
    assert "Speaker" in response.text
    assert await store.categories.count() == 1
