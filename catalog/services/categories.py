"""Business logic for categories."""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger

from catalog.core.metrics import record_catalog_event
from catalog.crud.store import CatalogStore
from catalog.db.models import Category, Item
from catalog.schemas.catalog import CategoryForm, FieldError, Page, Redirect
from catalog.services.errors import NotFoundError
from catalog.services.validation import CATEGORY_RULES, coerce_id, sanitize_form, validate

CATEGORY_LIST_URL = "/catalog/categories"
DUPLICATE_NAME_MESSAGE = "A category with this name already exists"


class CategoryService:
    """Service for category pages and mutations."""

    def __init__(self, store: CatalogStore):
        """Initialize with the catalog store."""
        self.store = store

    async def list_categories(self) -> Page:
        """All categories ordered by name."""
        categories = await self.store.categories.list_by_name()
        return Page(template="category_list.html", context={"title": "Category List", "category_list": categories})

    async def category_detail(self, category_id: Any) -> Page:
        """A category and the items filed under it."""
        category, items = await self._load_with_items(category_id)
        if category is None:
            logger.warning(f"Category with ID {category_id} not found")
            raise NotFoundError("Category", category_id)

        return Page(
            template="category_detail.html",
            context={"title": category.name, "category": category, "item_list": items},
        )

    def create_form(self) -> Page:
        return self._form_page("Create Category", CategoryForm(), [], sanitized=False)

    async def create_category(self, form: CategoryForm) -> Union[Page, Redirect]:
        """
        Create a category unless one with the same name exists.

        An existing name is not an error: the caller is sent to that record.
        """
        errors = validate(form.model_dump(), CATEGORY_RULES)
        if errors:
            return self._form_page("Create Category", form, errors)

        values = form.to_values()
        existing = await self.store.categories.get_by_name(values["name"])
        if existing is not None:
            logger.info(f"Category {values['name']!r} already exists with ID {existing.id}")
            return Redirect(url=existing.url)

        category = await self.store.categories.create(**values)
        record_catalog_event("category", "create")
        logger.info(f"Created new category with ID {category.id}")
        return Redirect(url=category.url)

    async def update_form(self, category_id: Any) -> Page:
        category = await self._get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return self._form_page("Update Category", CategoryForm.from_category(category), [], sanitized=False)

    async def update_category(self, category_id: Any, form: CategoryForm) -> Union[Page, Redirect]:
        """Replace a category's name and description."""
        category = await self._get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)

        errors = validate(form.model_dump(), CATEGORY_RULES)
        values = form.to_values()
        if not errors:
            existing = await self.store.categories.get_by_name(values["name"])
            if existing is not None and existing.id != category.id:
                errors.append(FieldError(field="name", message=DUPLICATE_NAME_MESSAGE))
        if errors:
            return self._form_page("Update Category", form, errors)

        updated = await self.store.categories.update(category.id, **values)
        if updated is None:
            raise NotFoundError("Category", category_id)

        record_catalog_event("category", "update")
        logger.info(f"Updated category with ID {updated.id}")
        return Redirect(url=updated.url)

    async def delete_form(self, category_id: Any) -> Union[Page, Redirect]:
        """Confirmation page, listing the items that would block the delete."""
        category, items = await self._load_with_items(category_id)
        if category is None:
            return Redirect(url=CATEGORY_LIST_URL)
        return self._delete_page(category, items)

    async def delete_category(self, category_id: Any) -> Union[Page, Redirect]:
        """
        Delete a category that no item references.

        A missing category redirects to the list. A referenced one is kept and
        the confirmation page is shown again with the blocking items.
        """
        category, items = await self._load_with_items(category_id)
        if category is None:
            logger.info(f"Category with ID {category_id} already gone")
            return Redirect(url=CATEGORY_LIST_URL)

        if items:
            logger.warning(f"Refusing to delete category {category.id}: {len(items)} item(s) reference it")
            return self._delete_page(category, items)

        await self.store.categories.remove(category.id)
        record_catalog_event("category", "delete")
        logger.info(f"Deleted category with ID {category.id}")
        return Redirect(url=CATEGORY_LIST_URL)

    async def _get(self, category_id: Any) -> Optional[Category]:
        pk = coerce_id(category_id)
        if pk is None:
            return None
        return await self.store.categories.get(pk)

    async def _load_with_items(self, category_id: Any) -> Tuple[Optional[Category], Sequence[Item]]:
        pk = coerce_id(category_id)
        if pk is None:
            return None, []
        category, items = await asyncio.gather(
            self.store.categories.get(pk),
            self.store.items.list_by_category(pk),
        )
        return category, items

    @staticmethod
    def _delete_page(category: Category, items: Sequence[Item]) -> Page:
        return Page(
            template="category_delete.html",
            context={"title": "Delete Category", "category": category, "category_items": list(items)},
        )

    @staticmethod
    def _form_page(title: str, form: CategoryForm, errors: List[FieldError], sanitized: bool = True) -> Page:
        values: Dict[str, Any] = sanitize_form(form) if sanitized else form.model_dump()
        return Page(template="category_form.html", context={"title": title, "form": values, "errors": errors})
