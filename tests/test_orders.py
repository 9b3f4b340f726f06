"""Tests for the order ledger endpoints"""
import json
import logging

import pytest

from cart.engine import CartEngine


def _create(client, items, **extra):
    body = {"customer_name": "Alice Martin", "items": items}
    body.update(extra)
    return client.post("/api/v1/orders", json=body)


def test_create_order_computes_total(client, sample_items):
    resp = _create(client, sample_items, customer_email="alice@louvre-latte.com", notes="No sugar")

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["message"] == "Order placed successfully."
    order = body["data"]
    assert order["status"] == "pending"
    assert order["total_cents"] == 1200
    assert order["total"] == "12.00"
    assert order["item_count"] == 3
    assert order["notes"] == "No sugar"
    assert [i["name"] for i in order["items"]] == ["Latte", "Croissant"]


def test_create_order_from_cart_handoff(client):
    """The cart's checkout payload is accepted as-is"""
    engine = CartEngine()
    engine.add_item("Latte", "4.50", "img/latte.jpg")
    engine.add_item("Latte", "4.50", "img/latte.jpg")
    engine.add_item("Croissant", "3.00", "img/croissant.jpg")

    resp = _create(client, json.loads(engine.serialize_for_checkout()))

    assert resp.status_code == 201
    assert resp.get_json()["data"]["total_cents"] == 1200


def test_create_order_merges_repeated_names(client):
    items = [
        {"name": "Latte", "unitPrice": 4.5, "quantity": 1},
        {"name": "Latte", "unitPrice": 5.0, "quantity": 2},
    ]

    order = _create(client, items).get_json()["data"]

    assert order["items"] == [{"name": "Latte", "unitPrice": 4.5, "quantity": 3, "imageUrl": None}]
    assert order["total_cents"] == 1350


def test_create_order_with_empty_cart(client):
    resp = _create(client, [])

    assert resp.status_code == 422
    assert resp.get_json()["error"]["code"] == "CHECKOUT_EMPTY"


@pytest.mark.parametrize("items", [
    [{"name": "Latte", "unitPrice": 4.5, "quantity": 0}],
    [{"name": "Latte", "unitPrice": -4.5, "quantity": 1}],
    [{"name": "", "unitPrice": 4.5, "quantity": 1}],
    [{"unitPrice": 4.5, "quantity": 1}],
])
def test_create_order_rejects_bad_items(client, items):
    assert _create(client, items).status_code == 400


def test_create_order_requires_json(client):
    resp = client.post("/api/v1/orders", data={"customer_name": "Alice"})

    assert resp.status_code == 400


def test_admin_endpoints_require_token(client, sample_items):
    order_id = _create(client, sample_items).get_json()["data"]["order_id"]

    assert client.get("/api/v1/orders").status_code == 401
    assert client.get(f"/api/v1/orders/{order_id}").status_code == 401
    assert client.delete(f"/api/v1/orders/{order_id}").status_code == 401
    assert client.get("/api/v1/orders", headers={"X-Admin-Token": "wrong"}).status_code == 401


def test_token_accepted_as_query_parameter(client, admin_headers):
    token = next(iter(admin_headers.values()))

    assert client.get(f"/api/v1/orders?token={token}").status_code == 200


def test_list_orders_paginates_newest_first(client, admin_headers, sample_items):
    ids = [_create(client, sample_items).get_json()["data"]["order_id"] for _ in range(3)]

    first = client.get("/api/v1/orders?limit=2", headers=admin_headers).get_json()["data"]
    assert [o["order_id"] for o in first["items"]] == [ids[2], ids[1]]
    assert first["pagination"]["has_more"] is True

    cursor = first["pagination"]["cursor"]
    second = client.get(f"/api/v1/orders?limit=2&after={cursor}", headers=admin_headers).get_json()["data"]
    assert [o["order_id"] for o in second["items"]] == [ids[0]]
    assert second["pagination"] == {"cursor": None, "has_more": False, "count": 1}


def test_list_orders_filters_by_status(client, admin_headers, sample_items):
    keep = _create(client, sample_items).get_json()["data"]["order_id"]
    other = _create(client, sample_items).get_json()["data"]["order_id"]
    client.patch(f"/api/v1/orders/{other}", json={"status": "completed"}, headers=admin_headers)

    data = client.get("/api/v1/orders?status=pending", headers=admin_headers).get_json()["data"]

    assert [o["order_id"] for o in data["items"]] == [keep]


def test_list_orders_rejects_bad_limit(client, admin_headers):
    assert client.get("/api/v1/orders?limit=abc", headers=admin_headers).status_code == 400
    assert client.get("/api/v1/orders?limit=500", headers=admin_headers).status_code == 400


def test_get_order(client, admin_headers, sample_items):
    order_id = _create(client, sample_items).get_json()["data"]["order_id"]

    resp = client.get(f"/api/v1/orders/{order_id}", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.get_json()["data"]["customer_name"] == "Alice Martin"
    assert client.get("/api/v1/orders/9999", headers=admin_headers).status_code == 404


def test_update_order(client, admin_headers, sample_items):
    order_id = _create(client, sample_items).get_json()["data"]["order_id"]

    resp = client.patch(
        f"/api/v1/orders/{order_id}",
        json={"status": "preparing", "notes": "Table 4"},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    order = resp.get_json()["data"]
    assert order["status"] == "preparing"
    assert order["notes"] == "Table 4"
    assert order["total_cents"] == 1200


@pytest.mark.parametrize("body", [
    {},
    {"status": "shipped"},
    {"customer_email": "nope"},
])
def test_update_order_validation(client, admin_headers, sample_items, body):
    order_id = _create(client, sample_items).get_json()["data"]["order_id"]

    resp = client.patch(f"/api/v1/orders/{order_id}", json=body, headers=admin_headers)

    assert resp.status_code == 400


def test_update_missing_order(client, admin_headers):
    resp = client.patch("/api/v1/orders/9999", json={"status": "completed"}, headers=admin_headers)

    assert resp.status_code == 404


def test_delete_order(client, admin_headers, sample_items):
    order_id = _create(client, sample_items).get_json()["data"]["order_id"]

    assert client.delete(f"/api/v1/orders/{order_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/v1/orders/{order_id}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/v1/orders/{order_id}", headers=admin_headers).status_code == 404


def test_create_order_accepts_large_quantities(client):
    engine = CartEngine()
    for _ in range(100):
        engine.add_item("Latte", "4.50")

    resp = _create(client, json.loads(engine.serialize_for_checkout()))

    assert resp.status_code == 201
    assert resp.get_json()["data"]["total_cents"] == 45000


def test_create_order_warns_on_conflicting_prices(client, caplog):
    items = [
        {"name": "Latte", "unitPrice": 4.5, "quantity": 1},
        {"name": "Latte", "unitPrice": 5.0, "quantity": 1},
    ]

    with caplog.at_level(logging.WARNING, logger="routes.orders"):
        _create(client, items)

    assert any("Latte" in r.getMessage() and "keeping 4.50" in r.getMessage() for r in caplog.records)


def test_create_order_rejects_price_above_max(client):
    items = [{"name": "Banquet", "unitPrice": 12345678901234567.89, "quantity": 1}]

    assert _create(client, items).status_code == 400


def test_errors_use_json_envelope(client, admin_headers):
    missing = client.get("/api/v1/orders/9999", headers=admin_headers).get_json()
    no_token = client.get("/api/v1/orders").get_json()
    bad_limit = client.get("/api/v1/orders?limit=abc", headers=admin_headers).get_json()
    bad_body = _create(client, [{"name": "Latte", "quantity": 1}]).get_json()

    assert missing["error"]["code"] == "NOT_FOUND"
    assert no_token["error"]["code"] == "UNAUTHORIZED"
    assert bad_limit["error"]["code"] == "VALIDATION_ERROR"
    assert bad_body["error"]["code"] == "VALIDATION_ERROR"
    assert bad_body["error"]["details"]["field_errors"][0]["field"] == "items"
