import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catalog.api.errors import error_payload, register_exception_handlers
from catalog.services.errors import NotFoundError


@pytest.fixture(scope="module")
def app_with_errors():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/page/missing")
    async def missing_page():
        raise NotFoundError("Item", "42")

    @app.get("/api/missing")
    async def missing_api():
        raise NotFoundError("Item", "42")

    @app.get("/api/validation")
    async def validation_endpoint(param: int):
        return {"param": param}

    @app.get("/page/integrity")
    async def integrity_error():
        raise IntegrityError("mock stmt", "mock params", Exception("FOREIGN KEY constraint failed"))

    @app.get("/api/sqlalchemy")
    async def sqlalchemy_error():
        raise SQLAlchemyError("mock SQL error")

    @app.get("/page/general")
    async def general_error():
        raise RuntimeError("some unexpected error")

    return app


@pytest.fixture
def error_client(app_with_errors):
    transport = ASGITransport(app=app_with_errors, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
async def test_not_found_renders_error_page(error_client):
    async with error_client as ac:
        response = await ac.get("/page/missing")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/html")
    assert "Item not found" in response.text


@pytest.mark.asyncio
async def test_not_found_under_api_is_json(error_client):
    async with error_client as ac:
        response = await ac.get("/api/missing")

    assert response.status_code == 404
    assert response.json() == {"message": "Item not found", "detail": ""}


@pytest.mark.asyncio
async def test_unknown_route_renders_error_page(error_client):
    async with error_client as ac:
        response = await ac.get("/page/nowhere")

    assert response.status_code == 404
    assert "Not Found" in response.text


@pytest.mark.asyncio
async def test_validation_exception(error_client):
    async with error_client as ac:
        response = await ac.get("/api/validation", params={"param": "abc"})

    assert response.status_code == 400
    assert "param" in response.json()["detail"]


@pytest.mark.asyncio
async def test_integrity_exception(error_client):
    async with error_client as ac:
        response = await ac.get("/page/integrity")

    assert response.status_code == 409
    assert "FOREIGN KEY constraint failed" in response.text


@pytest.mark.asyncio
async def test_sqlalchemy_exception(error_client):
    async with error_client as ac:
        response = await ac.get("/api/sqlalchemy")

    assert response.status_code == 500
    assert response.json()["message"] == "Database error"


@pytest.mark.asyncio
async def test_general_exception_hides_detail(error_client):
    async with error_client as ac:
        response = await ac.get("/page/general")

    assert response.status_code == 500
    assert "Something went wrong" in response.text
    assert "some unexpected error" not in response.text


def test_error_payload():
    assert error_payload("Database error", "boom") == {"message": "Database error", "detail": "boom"}
