"""
Fill the catalog database with sample categories and items.

Usage:
  python -m catalog.scripts.populate_db [--database-url URL] [--reset]
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Dict, List, Optional, Tuple

from loguru import logger

from catalog.core.logging import configure_logging
from catalog.crud.store import CatalogStore
from catalog.db.models import Category, Item
from catalog.db.session import DATABASE_URL, Base, build_engine, build_session_factory

SAMPLE_CATEGORIES: List[Tuple[str, str]] = [
    ("Computer", "PCs and all its components"),
    ("Phone", "Phone devices and accessories (not include gadgets)"),
    (
        "Furniture",
        "Furniture is a moveable object that is built for human use. It can be used for a variety of purposes",
    ),
    ("Gadgets", "Mechanical, or electronic device that has a practical use"),
]

# (name, description, price, number_in_stock, category name)
SAMPLE_ITEMS: List[Tuple[str, str, float, int, str]] = [
    ("Max Fort model 3", "PC gamer 64 ram, 1T ROM", 900, 5, "Computer"),
    ("IPhone X", "The new generation of one in the palm of your hands", 1500, 2, "Phone"),
    ("Redmi 9t", "4gm ram 64gb rom 54mp, 8mp frontal camera", 100, 16, "Phone"),
    ("Optiplex 980", "10ram 300rom", 200, 10, "Computer"),
    ("PC table", "White color", 50, 7, "Furniture"),
    ("Apple watch Series 9", "Powerful sensors, advanced health features.", 500, 3, "Gadgets"),
    ("Apple watch Ultra 2", "The most rugged, and capable.", 800, 2, "Gadgets"),
    ("Apple watch SE", "All the essentials. Light on price.", 300, 8, "Gadgets"),
]


async def create_categories(store: CatalogStore) -> Dict[str, Category]:
    """Insert the sample categories, reusing any that already exist by name."""
    logger.info("Adding categories")
    created: Dict[str, Category] = {}
    for name, description in SAMPLE_CATEGORIES:
        category = await store.categories.get_by_name(name)
        if category is None:
            category = await store.categories.create(name=name, description=description)
            logger.info(f"Added category: {name}")
        created[name] = category
    return created


async def create_items(store: CatalogStore, categories: Dict[str, Category]) -> List[Item]:
    """Insert the sample items, reusing any that already exist by name."""
    logger.info("Adding items")
    items: List[Item] = []
    for name, description, price, number_in_stock, category_name in SAMPLE_ITEMS:
        item = await store.items.get_by_name(name)
        if item is None:
            item = await store.items.create(
                name=name,
                description=description,
                price=price,
                number_in_stock=number_in_stock,
                category_id=categories[category_name].id,
            )
            logger.info(f"Added item: {item.name}")
        items.append(item)
    return items


async def populate(database_url: str, reset: bool = False) -> Tuple[int, int]:
    """Create the schema and insert the sample data. Returns the sample category and item counts."""
    engine = build_engine(database_url)
    try:
        async with engine.begin() as conn:
            if reset:
                logger.warning("Dropping existing catalog tables")
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

        store = CatalogStore(build_session_factory(engine))
        categories = await create_categories(store)
        items = await create_items(store, categories)
        return len(categories), len(items)
    finally:
        await engine.dispose()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Populate the inventory catalog with sample data")
    parser.add_argument(
        "--database-url",
        type=str,
        default=DATABASE_URL,
        help="SQLAlchemy async database URL (defaults to the configured DATABASE_URI)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop the catalog tables before inserting",
    )
    args = parser.parse_args(argv)

    configure_logging()
    category_count, item_count = asyncio.run(populate(args.database_url, reset=args.reset))
    logger.info(f"Populated catalog with {category_count} categories and {item_count} items")


if __name__ == "__main__":
    main()
