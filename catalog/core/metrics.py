"""
Prometheus metrics configuration.
"""

import functools
import re
import time
from typing import Any, Callable, TypeVar, cast

from fastapi import FastAPI, Request, Response
from loguru import logger
from prometheus_client import REGISTRY, Counter, Gauge, Histogram, Summary
from prometheus_client.openmetrics.exposition import (
    CONTENT_TYPE_LATEST,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

F = TypeVar("F", bound=Callable[..., Any])

# Define metrics
REQUEST_COUNT = Counter("http_requests_total", "Total HTTP requests count", ["method", "endpoint", "status_code"])

REQUEST_TIME = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0, float("inf")),
)

REQUEST_IN_PROGRESS = Gauge("http_requests_in_progress", "Number of HTTP requests in progress", ["method", "endpoint"])

EXCEPTION_COUNT = Counter(
    "http_exceptions_total", "Total HTTP exceptions count", ["method", "endpoint", "exception_type"]
)

DB_QUERY_TIME = Summary("db_query_duration_seconds", "Database query duration in seconds", ["query_type", "table"])

CATALOG_EVENTS = Counter("catalog_events_total", "Catalog mutations", ["entity", "action"])

# /catalog/item/42/update -> /catalog/item/{id}/update
_ID_SEGMENT = re.compile(r"^(/catalog/(?:item|category))/[^/]+(?=/|$)")
_STATIC_SEGMENTS = ("/catalog/item/create", "/catalog/category/create")


def normalize_path(path: str) -> str:
    """Replace path ids with a placeholder to keep label cardinality bounded."""
    if path.startswith(_STATIC_SEGMENTS):
        return path
    return _ID_SEGMENT.sub(r"\1/{id}", path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware that collects Prometheus metrics for HTTP requests.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        method = request.method
        path = request.url.path

        if path == "/metrics":
            return await call_next(request)

        path = normalize_path(path)
        start_time = time.time()
        REQUEST_IN_PROGRESS.labels(method=method, endpoint=path).inc()

        try:
            response = await call_next(request)
            REQUEST_COUNT.labels(method=method, endpoint=path, status_code=response.status_code).inc()
            REQUEST_TIME.labels(method=method, endpoint=path).observe(time.time() - start_time)
            return response
        except Exception as e:
            EXCEPTION_COUNT.labels(method=method, endpoint=path, exception_type=type(e).__name__).inc()
            logger.exception(f"Request failed: {str(e)}")
            raise
        finally:
            REQUEST_IN_PROGRESS.labels(method=method, endpoint=path).dec()


async def metrics_endpoint(request: Request) -> Response:
    """
    Endpoint for exposing Prometheus metrics.
    """
    data = generate_latest(REGISTRY)
    return Response(content=data, headers={"Content-Type": CONTENT_TYPE_LATEST})


def setup_metrics(app: FastAPI) -> None:
    """
    Set up Prometheus metrics and middleware for FastAPI application.
    """
    app.add_middleware(PrometheusMiddleware)
    app.add_route("/metrics", metrics_endpoint)

    logger.info("Prometheus metrics configured")


def record_catalog_event(entity: str, action: str) -> None:
    """Count a create/update/delete of a catalog entity."""
    CATALOG_EVENTS.labels(entity=entity, action=action).inc()


def time_db_query(query_type: str, table: str) -> Callable[[F], F]:
    """Decorator to time database queries."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                DB_QUERY_TIME.labels(query_type=query_type, table=table).observe(time.time() - start_time)

        return cast(F, wrapper)

    return decorator
