"""
Error handling: HTML error pages for catalog routes, JSON under ``/api``.
"""

from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.api.middleware import get_request_id
from catalog.api.templating import templates
from catalog.core.config import settings
from catalog.services.errors import NotFoundError


def create_error_response(
    request: Request, status_code: int, message: str, detail: str = ""
) -> Response:
    """
    Build an error response in the format the request path expects.
    """
    if request.url.path.startswith("/api"):
        return JSONResponse(status_code=status_code, content=error_payload(message, detail))

    # Internal details only reach the page in debug mode
    shown_detail = detail if settings.DEBUG or status_code < 500 else ""
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": message,
            "message": message,
            "status_code": status_code,
            "detail": shown_detail,
            "request_id": get_request_id(),
        },
        status_code=status_code,
    )


def error_payload(message: str, detail: str) -> Dict[str, str]:
    return {"message": message, "detail": detail}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers for the FastAPI application.
    """

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
        logger.info(f"{exc.entity} {exc.identifier!r} not found for {request.url.path}")
        return create_error_response(request, status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        message = "Not Found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
        return create_error_response(request, exc.status_code, message, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
        logger.warning(f"Validation error: {exc.errors()}")

        def flatten_error(err: dict) -> str:
            location = ".".join(str(loc) for loc in err.get("loc", []))
            message = err.get("msg", "Validation error")
            return f"{location}: {message}"

        flat_errors = [flatten_error(err) for err in exc.errors()]
        return create_error_response(request, status.HTTP_400_BAD_REQUEST, "Invalid request", " | ".join(flat_errors))

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError) -> Response:
        logger.error(f"Database integrity error: {str(exc)}")
        return create_error_response(request, status.HTTP_409_CONFLICT, "Conflicting change", str(exc.orig))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> Response:
        logger.error(f"Database error: {str(exc)}")
        return create_error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error", str(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> Response:
        logger.exception(f"Unhandled exception: {str(exc)}")
        return create_error_response(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong", str(exc)
        )
