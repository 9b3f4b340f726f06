import logging
from collections import Counter
from typing import Any, Dict

from flask import Blueprint
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from cart.pricing import from_cents
from core.exceptions import DatabaseError
from db import get_connection
from models import ORDER_STATUSES, ContactMessage, Order
from routes.utils import require_admin_token, success_response

logger = logging.getLogger(__name__)

stats_bp = Blueprint("stats", __name__)

_orders = Order.__table__
_messages = ContactMessage.__table__

TOP_ITEMS_LIMIT = 5


def compute_stats(conn) -> Dict[str, Any]:
    """
    Aggregate the order ledger.

    Revenue and top items leave cancelled orders out; counts include them.
    """
    order_count = conn.execute(select(func.count()).select_from(_orders)).scalar_one()
    revenue_cents = conn.execute(
        select(func.coalesce(func.sum(_orders.c.total_cents), 0))
        .where(_orders.c.status != "cancelled")
    ).scalar_one()

    by_status = {status: 0 for status in ORDER_STATUSES}
    for status, count in conn.execute(
        select(_orders.c.status, func.count()).group_by(_orders.c.status)
    ):
        by_status[status] = int(count)

    # items is a JSON document, so per-item totals are summed here
    quantities: Counter = Counter()
    for items in conn.execute(
        select(_orders.c["items"]).where(_orders.c.status != "cancelled")
    ).scalars():
        for item in items or []:
            quantities[item.get("name")] += int(item.get("quantity", 0))

    message_count = conn.execute(select(func.count()).select_from(_messages)).scalar_one()

    return {
        "order_count": int(order_count),
        "revenue_cents": int(revenue_cents),
        "revenue": str(from_cents(int(revenue_cents))),
        "orders_by_status": by_status,
        "top_items": [
            {"name": name, "quantity": qty}
            for name, qty in quantities.most_common(TOP_ITEMS_LIMIT)
        ],
        "contact_message_count": int(message_count),
    }


@stats_bp.route("", methods=["GET"])
@require_admin_token
def get_stats():
    try:
        with get_connection() as conn:
            stats = compute_stats(conn)
    except SQLAlchemyError as e:
        logger.error(f"get_stats db error: {e}")
        raise DatabaseError(str(e), operation="get_stats")
    return success_response(stats)
