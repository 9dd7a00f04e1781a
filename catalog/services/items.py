"""Business logic for items."""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Union

from loguru import logger

from catalog.core.metrics import record_catalog_event
from catalog.crud.store import CatalogStore
from catalog.db.models import Category, item_url
from catalog.schemas.catalog import CatalogCounts, FieldError, ItemForm, Page, Redirect
from catalog.services.errors import NotFoundError
from catalog.services.validation import ITEM_RULES, coerce_id, sanitize_form, validate

ITEM_LIST_URL = "/catalog/items"
UNKNOWN_CATEGORY_MESSAGE = "Selected category does not exist."


class ItemService:
    """Service for item pages and mutations."""

    def __init__(self, store: CatalogStore):
        """Initialize with the catalog store."""
        self.store = store

    async def get_counts(self) -> CatalogCounts:
        category_count, item_count = await asyncio.gather(
            self.store.categories.count(),
            self.store.items.count(),
        )
        return CatalogCounts(category_count=category_count, item_count=item_count)

    async def summary(self) -> Page:
        """Home page with catalog totals."""
        counts = await self.get_counts()
        return Page(template="index.html", context={"title": "Inventory Home", **counts.model_dump()})

    async def list_items(self) -> Page:
        items = await self.store.items.list_by_name()
        return Page(template="item_list.html", context={"title": "Item List", "item_list": items})

    async def item_detail(self, item_id: Any) -> Page:
        """An item with its category resolved."""
        pk = coerce_id(item_id)
        item = await self.store.items.get(pk) if pk is not None else None
        if item is None:
            logger.warning(f"Item with ID {item_id} not found")
            raise NotFoundError("Item", item_id)

        return Page(template="item_detail.html", context={"title": item.name, "item": item})

    async def create_form(self) -> Page:
        categories = await self.store.categories.list_by_name()
        return self._form_page("Create Item", ItemForm(), categories, [], sanitized=False)

    async def create_item(self, form: ItemForm) -> Union[Page, Redirect]:
        """Create a new item from a submitted form."""
        errors = await self._validate(form)
        if errors:
            categories = await self.store.categories.list_by_name()
            return self._form_page("Create Item", form, categories, errors)

        item = await self.store.items.create(**form.to_values())
        record_catalog_event("item", "create")
        logger.info(f"Created new item with ID {item.id}")
        return Redirect(url=item.url)

    async def update_form(self, item_id: Any) -> Page:
        """Form filled with the item's current values."""
        pk = coerce_id(item_id)
        if pk is None:
            raise NotFoundError("Item", item_id)
        item, categories = await asyncio.gather(
            self.store.items.get(pk),
            self.store.categories.list_by_name(),
        )
        if item is None:
            logger.warning(f"Item with ID {item_id} not found")
            raise NotFoundError("Item", item_id)

        return self._form_page("Update Item", ItemForm.from_item(item), categories, [], sanitized=False)

    async def update_item(self, item_id: Any, form: ItemForm) -> Union[Page, Redirect]:
        """Replace every mutable field of an existing item, keeping its id."""
        pk = coerce_id(item_id)
        item = await self.store.items.get(pk) if pk is not None else None
        if item is None:
            logger.warning(f"Item with ID {item_id} not found")
            raise NotFoundError("Item", item_id)

        errors = await self._validate(form)
        if errors:
            categories = await self.store.categories.list_by_name()
            return self._form_page("Update Item", form, categories, errors)

        updated = await self.store.items.update(item.id, **form.to_values())
        if updated is None:
            raise NotFoundError("Item", item_id)

        record_catalog_event("item", "update")
        logger.info(f"Updated item with ID {updated.id}")
        return Redirect(url=item_url(item.id))

    async def delete_form(self, item_id: Any) -> Union[Page, Redirect]:
        pk = coerce_id(item_id)
        item = await self.store.items.get(pk) if pk is not None else None
        if item is None:
            return Redirect(url=ITEM_LIST_URL)
        return Page(template="item_delete.html", context={"title": "Delete Item", "item": item})

    async def delete_item(self, item_id: Any) -> Redirect:
        """Delete an item. A missing item is not an error."""
        pk = coerce_id(item_id)
        removed = await self.store.items.remove(pk) if pk is not None else None
        if removed is None:
            logger.info(f"Item with ID {item_id} already gone")
        else:
            record_catalog_event("item", "delete")
            logger.info(f"Deleted item with ID {item_id}")
        return Redirect(url=ITEM_LIST_URL)

    async def _validate(self, form: ItemForm) -> List[FieldError]:
        errors = validate(form.model_dump(), ITEM_RULES)
        if not any(error.field == "category" for error in errors):
            category_id = coerce_id(form.category)
            category = await self.store.categories.get(category_id) if category_id is not None else None
            if category is None:
                errors.append(FieldError(field="category", message=UNKNOWN_CATEGORY_MESSAGE))
        return errors

    @staticmethod
    def _form_page(
        title: str,
        form: ItemForm,
        categories: Sequence[Category],
        errors: List[FieldError],
        sanitized: bool = True,
    ) -> Page:
        values: Dict[str, Any] = sanitize_form(form) if sanitized else form.model_dump()
        selected: Optional[str] = str(values.get("category") or "") or None
        return Page(
            template="item_form.html",
            context={
                "title": title,
                "form": values,
                "categories": list(categories),
                "selected_category": selected,
                "errors": errors,
            },
        )
