"""
FastAPI API dependencies.
"""

from functools import lru_cache

from fastapi import Depends

from catalog.crud.store import CatalogStore
from catalog.db.session import async_session_factory
from catalog.services.categories import CategoryService
from catalog.services.items import ItemService


@lru_cache
def get_store() -> CatalogStore:
    """
    Dependency for the catalog store bound to the application engine.
    """
    return CatalogStore(async_session_factory)


def get_category_service(store: CatalogStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)


def get_item_service(store: CatalogStore = Depends(get_store)) -> ItemService:
    return ItemService(store)
