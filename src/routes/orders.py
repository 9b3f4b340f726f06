import logging
from datetime import datetime, timezone
from typing import Dict, List

from flask import Blueprint, request
from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from cart.models import LineItem
from cart.pricing import from_cents, to_cents
from core.exceptions import (
    CheckoutEmptyError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from db import get_connection
from models import Order
from routes.schemas import OrderCreateSchema, OrderUpdateSchema
from routes.utils import isoformat, parse_int, require_admin_token, success_response

logger = logging.getLogger(__name__)

orders_bp = Blueprint("orders", __name__)

_create_schema = OrderCreateSchema()
_update_schema = OrderUpdateSchema()

_orders = Order.__table__


def _load_json(schema):
    if not request.is_json:
        raise ValidationError("Content-Type must be application/json.")
    try:
        return schema.load(request.get_json(force=True) or {})
    except SchemaValidationError as err:
        raise ValidationError(
            "Invalid request body.",
            field_errors=[{"field": str(k), "message": str(v)} for k, v in err.messages.items()],
        )


def _merge_line_items(raw_items: List[dict]) -> List[LineItem]:
    """Collapse repeated names into one line item, first price wins."""
    merged: Dict[str, LineItem] = {}
    for raw in raw_items:
        existing = merged.get(raw["name"])
        if existing:
            if existing.unit_price != raw["unit_price"]:
                logger.warning(
                    f"Order line {raw['name']!r} repeated at {raw['unit_price']}; "
                    f"keeping {existing.unit_price}"
                )
            existing.quantity += raw["quantity"]
        else:
            merged[raw["name"]] = LineItem(
                name=raw["name"],
                unit_price=raw["unit_price"],
                quantity=raw["quantity"],
                image_url=raw.get("image_url"),
            )
    return list(merged.values())


def order_to_dict(row) -> dict:
    return {
        "order_id": int(row["id"]),
        "customer_name": row["customer_name"],
        "customer_email": row["customer_email"],
        "status": row["status"],
        "items": row["items"] or [],
        "item_count": sum(int(i.get("quantity", 0)) for i in (row["items"] or [])),
        "total_cents": int(row["total_cents"]),
        "total": str(from_cents(row["total_cents"])),
        "notes": row["notes"],
        "created_at": isoformat(row["created_at"]),
        "updated_at": isoformat(row["updated_at"]),
    }


def _fetch_order(conn, order_id: int):
    row = conn.execute(select(_orders).where(_orders.c.id == order_id)).mappings().first()
    if not row:
        raise NotFoundError("Order", str(order_id))
    return row


@orders_bp.route("", methods=["POST"])
def create_order():
    """
    Record an order from the checkout view.

    The body carries the checkout transfer items as handed off by the cart
    page; the total is recomputed here in cents rather than trusted.
    """
    data = _load_json(_create_schema)

    line_items = _merge_line_items(data["items"])
    if not line_items:
        raise CheckoutEmptyError()

    total_cents = sum(to_cents(item.unit_price) * item.quantity for item in line_items)
    now = datetime.now(timezone.utc)

    try:
        with get_connection() as conn:
            result = conn.execute(
                insert(_orders).values(
                    customer_name=data["customer_name"],
                    customer_email=data.get("customer_email"),
                    status="pending",
                    items=[item.to_transfer_dict() for item in line_items],
                    total_cents=total_cents,
                    notes=data.get("notes"),
                    created_at=now,
                    updated_at=now,
                )
            )
            order_id = int(result.inserted_primary_key[0])
            row = _fetch_order(conn, order_id)
            conn.commit()
    except SQLAlchemyError as e:
        logger.error(f"create_order db error: {e}")
        raise DatabaseError(str(e), operation="create_order")

    logger.info(f"Order {order_id} created: {len(line_items)} lines, {total_cents} cents")
    return success_response(order_to_dict(row), "Order placed successfully.", 201)


@orders_bp.route("", methods=["GET"])
@require_admin_token
def list_orders():
    """List orders, most recent first, with id-cursor pagination."""
    limit = parse_int(request.args.get("limit"), default=20, min_val=1, max_val=100, field_name="limit")
    after = parse_int(request.args.get("after"), default=None, min_val=1, field_name="after")
    status = request.args.get("status")

    stmt = select(_orders)
    if after is not None:
        stmt = stmt.where(_orders.c.id < after)
    if status:
        stmt = stmt.where(_orders.c.status == status)
    # One extra row tells us whether another page exists
    stmt = stmt.order_by(_orders.c.id.desc()).limit(limit + 1)

    try:
        with get_connection() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as e:
        logger.error(f"list_orders db error: {e}")
        raise DatabaseError(str(e), operation="list_orders")

    has_more = len(rows) > limit
    items = [order_to_dict(r) for r in rows[:limit]]
    cursor = items[-1]["order_id"] if has_more else None

    return success_response(
        {
            "items": items,
            "pagination": {"cursor": cursor, "has_more": has_more, "count": len(items)},
        }
    )


@orders_bp.route("/<int:order_id>", methods=["GET"])
@require_admin_token
def get_order(order_id: int):
    with get_connection() as conn:
        row = _fetch_order(conn, order_id)
    return success_response(order_to_dict(row))


@orders_bp.route("/<int:order_id>", methods=["PATCH"])
@require_admin_token
def update_order(order_id: int):
    """Change status, notes or customer details of an order."""
    data = _load_json(_update_schema)
    if not data:
        raise ValidationError("No updatable fields supplied.")

    try:
        with get_connection() as conn:
            result = conn.execute(
                update(_orders)
                .where(_orders.c.id == order_id)
                .values(**data, updated_at=datetime.now(timezone.utc))
            )
            if result.rowcount == 0:
                raise NotFoundError("Order", str(order_id))
            row = _fetch_order(conn, order_id)
            conn.commit()
    except SQLAlchemyError as e:
        logger.error(f"update_order db error: {e}")
        raise DatabaseError(str(e), operation="update_order")

    logger.info(f"Order {order_id} updated: {sorted(data)}")
    return success_response(order_to_dict(row), "Order updated.")


@orders_bp.route("/<int:order_id>", methods=["DELETE"])
@require_admin_token
def delete_order(order_id: int):
    try:
        with get_connection() as conn:
            result = conn.execute(delete(_orders).where(_orders.c.id == order_id))
            if result.rowcount == 0:
                raise NotFoundError("Order", str(order_id))
            conn.commit()
    except SQLAlchemyError as e:
        logger.error(f"delete_order db error: {e}")
        raise DatabaseError(str(e), operation="delete_order")

    logger.info(f"Order {order_id} deleted")
    return success_response({"order_id": order_id}, "Order deleted.")
