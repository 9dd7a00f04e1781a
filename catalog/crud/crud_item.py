from typing import Any, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import load_only, selectinload

from catalog.core.metrics import time_db_query
from catalog.db.models import Item


class CRUDItem:
    """Item persistence. Reads that display a category load it eagerly."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @time_db_query("select", "items")
    async def get(self, item_id: int) -> Optional[Item]:
        async with self.session_factory() as session:
            return await session.get(Item, item_id, options=[selectinload(Item.category)])

    @time_db_query("select", "items")
    async def get_by_name(self, name: str) -> Optional[Item]:
        stmt = select(Item).where(Item.name == name).order_by(Item.id).limit(1)
        async with self.session_factory() as session:
            res = await session.execute(stmt)
            return res.scalars().first()

    @time_db_query("select", "items")
    async def list_by_name(self) -> Sequence[Item]:
        stmt = (
            select(Item)
            .options(load_only(Item.id, Item.name, Item.category_id), selectinload(Item.category))
            .order_by(Item.name.asc())
        )
        async with self.session_factory() as session:
            res = await session.execute(stmt)
            return res.scalars().all()

    @time_db_query("select", "items")
    async def list_by_category(self, category_id: int) -> Sequence[Item]:
        stmt = select(Item).where(Item.category_id == category_id).order_by(Item.name.asc())
        async with self.session_factory() as session:
            res = await session.execute(stmt)
            return res.scalars().all()

    @time_db_query("count", "items")
    async def count(self) -> int:
        async with self.session_factory() as session:
            res = await session.execute(select(func.count()).select_from(Item))
            return int(res.scalar_one())

    @time_db_query("insert", "items")
    async def create(self, **values: Any) -> Item:
        db_obj = Item(**values)
        async with self.session_factory() as session:
            session.add(db_obj)
            await session.commit()
            await session.refresh(db_obj)
        return db_obj

    @time_db_query("update", "items")
    async def update(self, item_id: int, **values: Any) -> Optional[Item]:
        async with self.session_factory() as session:
            db_obj = await session.get(Item, item_id)
            if db_obj is None:
                return None
            for field, value in values.items():
                setattr(db_obj, field, value)
            await session.commit()
            await session.refresh(db_obj)
            return db_obj

    @time_db_query("delete", "items")
    async def remove(self, item_id: int) -> Optional[Item]:
        async with self.session_factory() as session:
            db_obj = await session.get(Item, item_id)
            if db_obj is None:
                return None
            await session.delete(db_obj)
            await session.commit()
            return db_obj
