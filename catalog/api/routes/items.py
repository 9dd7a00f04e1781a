"""
Item pages and the catalog home page.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response

from catalog.api.dependencies import get_item_service
from catalog.api.templating import render
from catalog.schemas.catalog import ItemForm
from catalog.services.items import ItemService

router = APIRouter()

ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]


def item_form(
    name: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    price: Annotated[str, Form()] = "",
    number_in_stock: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
) -> ItemForm:
    return ItemForm(
        name=name,
        description=description,
        price=price,
        number_in_stock=number_in_stock,
        category=category,
    )


@router.get("", name="index")
async def index(request: Request, service: ItemServiceDep) -> Response:
    """Catalog home page with category and item counts."""
    return render(request, await service.summary())


@router.get("/items", name="item_list")
async def item_list(request: Request, service: ItemServiceDep) -> Response:
    """Display list of all items."""
    return render(request, await service.list_items())


@router.get("/item/create", name="item_create_get")
async def item_create_get(request: Request, service: ItemServiceDep) -> Response:
    return render(request, await service.create_form())


@router.post("/item/create", name="item_create_post")
async def item_create_post(
    request: Request,
    service: ItemServiceDep,
    form: Annotated[ItemForm, Depends(item_form)],
) -> Response:
    return render(request, await service.create_item(form))


@router.get("/item/{item_id}", name="item_detail")
async def item_detail(item_id: str, request: Request, service: ItemServiceDep) -> Response:
    """Display detail page for a specific item."""
    return render(request, await service.item_detail(item_id))


@router.get("/item/{item_id}/delete", name="item_delete_get")
async def item_delete_get(item_id: str, request: Request, service: ItemServiceDep) -> Response:
    return render(request, await service.delete_form(item_id))


@router.post("/item/{item_id}/delete", name="item_delete_post")
async def item_delete_post(item_id: str, request: Request, service: ItemServiceDep) -> Response:
    return render(request, await service.delete_item(item_id))


@router.get("/item/{item_id}/update", name="item_update_get")
async def item_update_get(item_id: str, request: Request, service: ItemServiceDep) -> Response:
    return render(request, await service.update_form(item_id))


@router.post("/item/{item_id}/update", name="item_update_post")
async def item_update_post(
    item_id: str,
    request: Request,
    service: ItemServiceDep,
    form: Annotated[ItemForm, Depends(item_form)],
) -> Response:
    return render(request, await service.update_item(item_id, form))
