"""Tests for the checkout transfer representation"""
import json
from decimal import Decimal

import pytest

from cart.storage import SessionStorage
from cart.transfer import CheckoutLineItem, deserialize_items, load_checkout_items


def test_deserialize_accepts_extra_fields_and_null_image():
    payload = json.dumps([
        {"name": "Latte", "unitPrice": 4.5, "quantity": 2, "imageUrl": None, "qty": 2},
    ])

    items = deserialize_items(payload)

    assert len(items) == 1
    assert items[0].unit_price == Decimal("4.50")
    assert items[0].image_url is None


@pytest.mark.parametrize("payload", [
    "not json",
    json.dumps({"name": "Latte"}),
    json.dumps([{"name": "Latte", "unitPrice": 4.5, "quantity": 0}]),
    json.dumps([{"name": "Latte", "unitPrice": -1, "quantity": 1}]),
    json.dumps([{"name": "   ", "unitPrice": 1, "quantity": 1}]),
    json.dumps([{"unitPrice": 1, "quantity": 1}]),
])
def test_deserialize_rejects_malformed(payload):
    with pytest.raises(ValueError):
        deserialize_items(payload)


def test_load_checkout_items_ignores_malformed_state():
    storage = SessionStorage({"demoCart": "{broken"})

    assert load_checkout_items(storage) == []


def test_load_checkout_items_missing_key():
    assert load_checkout_items(SessionStorage()) == []


def test_model_accepts_field_names_and_aliases():
    by_alias = CheckoutLineItem.model_validate({"name": "Latte", "unitPrice": "4.5", "quantity": 1})
    by_name = CheckoutLineItem(name="Latte", unit_price=Decimal("4.5"), quantity=1)

    assert by_alias.to_line_item() == by_name.to_line_item()


def test_storage_only_holds_text():
    storage = SessionStorage()

    with pytest.raises(TypeError):
        storage.set_item("demoCart", [1, 2])

    storage.set_item("demoCart", "[]")
    storage.remove_item("demoCart")
    storage.remove_item("demoCart")
    assert "demoCart" not in storage
