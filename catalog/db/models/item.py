"""
Database model for items.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from catalog.db.session import Base

ITEM_URL_PREFIX = "/catalog/item"


def item_url(item_id: int) -> str:
    """Detail page path for an item id."""
    return f"{ITEM_URL_PREFIX}/{item_id}"


class Item(Base):
    """
    Database model for items.

    An item references at most one category. The reference is not cascaded:
    categories with items are protected by the delete workflow.
    """

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(200), nullable=False)
    price = Column(Float, nullable=False)
    number_in_stock = Column(Integer, nullable=False, default=0)

    # Foreign keys
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    category = relationship("Category", back_populates="items")

    @property
    def url(self) -> str:
        return item_url(self.id)

    def __repr__(self) -> str:
        return f"<Item id={self.id} name={self.name!r}>"
