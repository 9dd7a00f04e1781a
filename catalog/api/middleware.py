"""
API middleware components.
"""

import contextvars
import time
import uuid
from typing import Optional

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

# Context variables for request-scoped data
request_id_var = contextvars.ContextVar[Optional[str]]("request_id", default=None)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assign a request ID, bind it to every log line of the request and log
    the outcome.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        try:
            with logger.contextualize(request_id=request_id):
                response = await call_next(request)
                logger.bind(
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                    client_host=request.client.host if request.client else None,
                ).info(f"{request.method} {request.url.path} -> {response.status_code}")
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response


def get_request_id() -> str:
    """
    Get the request ID for the current request, or an empty string outside one.
    """
    request_id = request_id_var.get()
    return request_id if request_id is not None else ""
