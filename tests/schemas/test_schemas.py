import pytest
from pydantic import ValidationError

from catalog.db.models import Category, Item
from catalog.schemas.catalog import CategoryForm, FieldError, ItemForm, Page, Redirect, format_price


def test_category_form_defaults_to_empty_strings():
    form = CategoryForm()
    assert form.name == ""
    assert form.description == ""


def test_category_form_to_values_trims_and_drops_blank_description():
    assert CategoryForm(name="  Audio ", description="   ").to_values() == {"name": "Audio", "description": None}


def test_category_form_from_category():
    form = CategoryForm.from_category(Category(id=1, name="Audio", description=None))
    assert form == CategoryForm(name="Audio", description="")


def test_item_form_to_values_converts_types():
    form = ItemForm(name=" Speaker ", description=" Loud ", price=" 49.5 ", number_in_stock=" 3 ", category=" 2 ")

    assert form.to_values() == {
        "name": "Speaker",
        "description": "Loud",
        "price": 49.5,
        "number_in_stock": 3,
        "category_id": 2,
    }


def test_item_form_from_item_without_category():
    item = Item(id=3, name="Lamp", description="Warm", price=12.0, number_in_stock=1, category_id=None)

    form = ItemForm.from_item(item)

    assert form.price == "12.00"
    assert form.category == ""


def test_field_error_is_immutable():
    error = FieldError(field="name", message="required")
    with pytest.raises(ValidationError):
        error.message = "changed"


def test_page_errors_default_to_empty():
    assert Page(template="index.html").errors == []
    page = Page(template="item_form.html", context={"errors": [FieldError(field="price", message="bad")]})
    assert [e.field for e in page.errors] == ["price"]


def test_redirect_equality():
    assert Redirect(url="/catalog/items") == Redirect(url="/catalog/items")


@pytest.mark.parametrize("price, expected", [(12.0, "12.00"), (49.5, "49.50"), (9.999, "9.999"), (0.125, "0.125")])
def test_format_price_keeps_stored_value(price, expected):
    assert format_price(price) == expected
    assert float(format_price(price)) == price


def test_item_form_from_item_does_not_round_price():
    item = Item(id=4, name="Cable", description="Long", price=9.999, number_in_stock=2, category_id=1)

    form = ItemForm.from_item(item)

    assert form.price == "9.999"
    assert form.to_values()["price"] == 9.999
