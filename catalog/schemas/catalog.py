"""
Pydantic schemas for catalog forms and handler outcomes.

Form schemas hold the raw strings a user typed. They are never persisted
directly: ``to_values`` turns a validated form into column values.
"""

from typing import TYPE_CHECKING, Any, Dict, List

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from catalog.db.models import Category, Item


def format_price(value: float) -> str:
    """Two decimals when that is exact, otherwise the shortest repr that round-trips."""
    text = f"{value:.2f}"
    return text if float(text) == value else repr(value)


class FieldError(BaseModel):
    """A single rule violation reported back to the form."""

    field: str = Field(..., description="Form field name")
    message: str = Field(..., description="Human readable message")

    model_config = {"frozen": True}


class CategoryForm(BaseModel):
    """
    Schema for the category create/update form.
    """

    name: str = Field("", description="Category name")
    description: str = Field("", description="Optional category description")

    @classmethod
    def from_category(cls, category: "Category") -> "CategoryForm":
        return cls(name=category.name, description=category.description or "")

    def to_values(self) -> Dict[str, Any]:
        description = self.description.strip()
        return {"name": self.name.strip(), "description": description or None}


class ItemForm(BaseModel):
    """
    Schema for the item create/update form.

    ``category`` carries the selected category id as submitted.
    """

    name: str = Field("", description="Item name")
    description: str = Field("", description="Item description")
    price: str = Field("", description="Unit price")
    number_in_stock: str = Field("", description="Units in stock")
    category: str = Field("", description="Selected category id")

    @classmethod
    def from_item(cls, item: "Item") -> "ItemForm":
        return cls(
            name=item.name,
            description=item.description,
            price=format_price(item.price),
            number_in_stock=str(item.number_in_stock),
            category="" if item.category_id is None else str(item.category_id),
        )

    def to_values(self) -> Dict[str, Any]:
        """Column values for a form that already passed validation."""
        return {
            "name": self.name.strip(),
            "description": self.description.strip(),
            "price": float(self.price.strip()),
            "number_in_stock": int(self.number_in_stock.strip()),
            "category_id": int(self.category.strip()),
        }


class Page(BaseModel):
    """A template to render with its context."""

    template: str
    context: Dict[str, Any] = Field(default_factory=dict)
    status_code: int = 200

    model_config = {"arbitrary_types_allowed": True}

    @property
    def errors(self) -> List[FieldError]:
        return list(self.context.get("errors") or [])


class Redirect(BaseModel):
    """Send the client to another page (303 See Other)."""

    url: str


class CatalogCounts(BaseModel):
    """Totals shown on the catalog home page."""

    category_count: int = 0
    item_count: int = 0

