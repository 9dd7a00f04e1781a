"""
The store handle injected into catalog services.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.crud.crud_category import CRUDCategory
from catalog.crud.crud_item import CRUDItem


class CatalogStore:
    """Category and item persistence sharing one session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self.categories = CRUDCategory(session_factory)
        self.items = CRUDItem(session_factory)
