from typing import Any, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import load_only

from catalog.core.metrics import time_db_query
from catalog.db.models import Category


class CRUDCategory:
    """
    Category persistence.

    Every call opens its own session, so independent reads can be awaited
    together.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @time_db_query("select", "categories")
    async def get(self, category_id: int) -> Optional[Category]:
        async with self.session_factory() as session:
            return await session.get(Category, category_id)

    @time_db_query("select", "categories")
    async def get_by_name(self, name: str) -> Optional[Category]:
        stmt = select(Category).where(Category.name == name).order_by(Category.id).limit(1)
        async with self.session_factory() as session:
            res = await session.execute(stmt)
            return res.scalars().first()

    @time_db_query("select", "categories")
    async def list_by_name(self) -> Sequence[Category]:
        stmt = select(Category).options(load_only(Category.id, Category.name)).order_by(Category.name.asc())
        async with self.session_factory() as session:
            res = await session.execute(stmt)
            return res.scalars().all()

    @time_db_query("count", "categories")
    async def count(self) -> int:
        async with self.session_factory() as session:
            res = await session.execute(select(func.count()).select_from(Category))
            return int(res.scalar_one())

    @time_db_query("insert", "categories")
    async def create(self, **values: Any) -> Category:
        db_obj = Category(**values)
        async with self.session_factory() as session:
            session.add(db_obj)
            await session.commit()
            await session.refresh(db_obj)
        return db_obj

    @time_db_query("update", "categories")
    async def update(self, category_id: int, **values: Any) -> Optional[Category]:
        async with self.session_factory() as session:
            db_obj = await session.get(Category, category_id)
            if db_obj is None:
                return None
            for field, value in values.items():
                setattr(db_obj, field, value)
            await session.commit()
            await session.refresh(db_obj)
            return db_obj

    @time_db_query("delete", "categories")
    async def remove(self, category_id: int) -> Optional[Category]:
        async with self.session_factory() as session:
            db_obj = await session.get(Category, category_id)
            if db_obj is None:
                return None
            await session.delete(db_obj)
            await session.commit()
            return db_obj
