"""
Database model for categories.
"""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from catalog.db.session import Base

CATEGORY_URL_PREFIX = "/catalog/category"


def category_url(category_id: int) -> str:
    """Detail page path for a category id."""
    return f"{CATEGORY_URL_PREFIX}/{category_id}"


class Category(Base):
    """
    Database model for categories.
    """

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(200), nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    items = relationship("Item", back_populates="category", passive_deletes="all")

    @property
    def url(self) -> str:
        return category_url(self.id)

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r}>"
