"""
Category pages.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response

from catalog.api.dependencies import get_category_service
from catalog.api.templating import render
from catalog.schemas.catalog import CategoryForm
from catalog.services.categories import CategoryService

router = APIRouter()

CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]


def category_form(
    name: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
) -> CategoryForm:
    return CategoryForm(name=name, description=description)


@router.get("/categories", name="category_list")
async def category_list(request: Request, service: CategoryServiceDep) -> Response:
    """Display list of all categories."""
    return render(request, await service.list_categories())


@router.get("/category/create", name="category_create_get")
async def category_create_get(request: Request, service: CategoryServiceDep) -> Response:
    return render(request, service.create_form())


@router.post("/category/create", name="category_create_post")
async def category_create_post(
    request: Request,
    service: CategoryServiceDep,
    form: Annotated[CategoryForm, Depends(category_form)],
) -> Response:
    return render(request, await service.create_category(form))


@router.get("/category/{category_id}", name="category_detail")
async def category_detail(category_id: str, request: Request, service: CategoryServiceDep) -> Response:
    """Display detail page for a specific category."""
    return render(request, await service.category_detail(category_id))


@router.get("/category/{category_id}/delete", name="category_delete_get")
async def category_delete_get(category_id: str, request: Request, service: CategoryServiceDep) -> Response:
    return render(request, await service.delete_form(category_id))


@router.post("/category/{category_id}/delete", name="category_delete_post")
async def category_delete_post(category_id: str, request: Request, service: CategoryServiceDep) -> Response:
    return render(request, await service.delete_category(category_id))


@router.get("/category/{category_id}/update", name="category_update_get")
async def category_update_get(category_id: str, request: Request, service: CategoryServiceDep) -> Response:
    return render(request, await service.update_form(category_id))


@router.post("/category/{category_id}/update", name="category_update_post")
async def category_update_post(
    category_id: str,
    request: Request,
    service: CategoryServiceDep,
    form: Annotated[CategoryForm, Depends(category_form)],
) -> Response:
    return render(request, await service.update_category(category_id, form))
