import logging

from flask import Blueprint, request
from sqlalchemy import select

from cart.catalog import SHOW_ALL
from cart.pricing import from_cents
from db import get_connection
from models import MenuItem
from routes.utils import success_response

logger = logging.getLogger(__name__)

menu_bp = Blueprint("menu", __name__)

_menu = MenuItem.__table__


@menu_bp.route("", methods=["GET"])
def list_menu():
    """
    List available menu items, optionally for one category tab.

    Items come back in the catalog-entry shape the cart reads
    (name, unit_price, image_url, category).
    """
    category = request.args.get("category", SHOW_ALL).strip() or SHOW_ALL

    stmt = select(_menu).where(_menu.c.is_available.is_(True))
    if category != SHOW_ALL:
        stmt = stmt.where(_menu.c.category == category)
    stmt = stmt.order_by(_menu.c.category, _menu.c.id)

    with get_connection() as conn:
        rows = conn.execute(stmt).mappings().all()
        categories = conn.execute(
            select(_menu.c.category)
            .where(_menu.c.is_available.is_(True))
            .distinct()
            .order_by(_menu.c.category)
        ).scalars().all()

    items = [
        {
            "id": int(r["id"]),
            "name": r["name"],
            "category": r["category"],
            "unit_price": str(from_cents(r["price_cents"])),
            "price_cents": int(r["price_cents"]),
            "image_url": r["image_url"],
            "description": r["description"],
        }
        for r in rows
    ]

    return success_response({"items": items, "categories": list(categories), "category": category})
