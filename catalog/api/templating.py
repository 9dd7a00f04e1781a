"""
Jinja2 template environment shared by pages and error handlers.
"""

from fastapi import Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from starlette import status

from catalog.core.config import settings
from catalog.schemas.catalog import Page, Redirect

templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)


def render(request: Request, outcome: Page | Redirect) -> Response:
    """Turn a service outcome into an HTTP response."""
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.url, status_code=status.HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(request, outcome.template, outcome.context, status_code=outcome.status_code)
