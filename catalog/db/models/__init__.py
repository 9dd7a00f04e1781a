"""
Database models.
"""

from catalog.db.models.category import Category, category_url
from catalog.db.models.item import Item, item_url

__all__ = [
    "Category",
    "Item",
    "category_url",
    "item_url",
]
