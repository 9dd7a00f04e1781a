"""Form validation and sanitization."""

import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from markupsafe import Markup, escape
from pydantic import BaseModel

from catalog.schemas.catalog import FieldError

# Largest value an Integer column holds on every supported backend
MAX_INTEGER = 2**31 - 1


class FieldRule(BaseModel):
    """
    One check applied to one form field.

    The value is trimmed first when ``trim`` is set. A rule fails when the
    length is outside ``min_length``/``max_length`` or when ``parser`` raises
    ``ValueError``. Parsers only run on non-empty values, emptiness is the
    job of ``min_length``.
    """

    field: str
    message: str
    trim: bool = True
    min_length: int = 0
    max_length: Optional[int] = None
    parser: Optional[Callable[[str], Any]] = None

    model_config = {"frozen": True}

    def check(self, value: str) -> bool:
        text = value.strip() if self.trim else value
        if len(text) < self.min_length:
            return False
        if self.max_length is not None and len(text) > self.max_length:
            return False
        if self.parser is not None and text:
            try:
                self.parser(text)
            except ValueError:
                return False
        return True


def parse_price(text: str) -> float:
    value = float(text)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"invalid price: {text!r}")
    return value


def parse_stock(text: str) -> int:
    value = int(text)
    if value < 0 or value > MAX_INTEGER:
        raise ValueError(f"invalid stock: {text!r}")
    return value


def coerce_id(raw: Any) -> Optional[int]:
    """Turn a path or form id into a primary key, ``None`` if it cannot be one."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if 0 < value <= MAX_INTEGER else None


CATEGORY_RULES: List[FieldRule] = [
    FieldRule(field="name", message="Category name must contain at least 3 characters", min_length=3),
    FieldRule(field="name", message="Category name must be at most 100 characters", max_length=100),
    FieldRule(field="description", message="Description must be at most 200 characters", max_length=200),
]

ITEM_RULES: List[FieldRule] = [
    FieldRule(field="name", message="Name must not be empty.", min_length=1),
    FieldRule(field="description", message="Description must not be empty.", min_length=1),
    FieldRule(field="price", message="Price must not be empty.", min_length=1),
    FieldRule(field="number_in_stock", message="Number in stock must not be empty.", min_length=1),
    FieldRule(field="category", message="Category must not be empty.", min_length=1),
    FieldRule(field="name", message="Name must be at most 100 characters", max_length=100),
    FieldRule(field="description", message="Description must be at most 200 characters", max_length=200),
    FieldRule(field="price", message="Price must be a non-negative number", parser=parse_price),
    FieldRule(field="number_in_stock", message="Number in stock must be a non-negative whole number", parser=parse_stock),
]


def validate(data: Mapping[str, Any], rules: Iterable[FieldRule]) -> List[FieldError]:
    """
    Apply ``rules`` in order and collect every violation.

    Missing fields are checked as empty strings.
    """
    errors: List[FieldError] = []
    for rule in rules:
        value = data.get(rule.field)
        if not rule.check("" if value is None else str(value)):
            errors.append(FieldError(field=rule.field, message=rule.message))
    return errors


def sanitize(value: Any) -> Markup:
    """Trim and HTML-escape a submitted value before it is echoed back."""
    return escape(("" if value is None else str(value)).strip())


def sanitize_form(form: BaseModel) -> Dict[str, Markup]:
    return {key: sanitize(value) for key, value in form.model_dump().items()}
