"""
Catalog exceptions surfaced to the error page handlers.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for catalog workflow errors."""

    status_code = 500


class NotFoundError(CatalogError):
    """A requested category or item does not exist."""

    status_code = 404

    def __init__(self, entity: str, identifier: Any) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found")
