import logging

from flask import Blueprint, request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import DatabaseError
from db import get_connection
from models import ContactMessage, Order
from routes.orders import order_to_dict
from routes.stats import compute_stats
from routes.utils import isoformat, parse_int, require_admin_token, success_response

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)

_orders = Order.__table__
_messages = ContactMessage.__table__


@dashboard_bp.route("", methods=["GET"])
@require_admin_token
def dashboard():
    """Stats plus the latest contact messages and orders, for the staff page."""
    recent = parse_int(request.args.get("recent"), default=10, min_val=1, max_val=50, field_name="recent")

    try:
        with get_connection() as conn:
            stats = compute_stats(conn)
            messages = conn.execute(
                select(_messages).order_by(_messages.c.id.desc()).limit(recent)
            ).mappings().all()
            orders = conn.execute(
                select(_orders).order_by(_orders.c.id.desc()).limit(recent)
            ).mappings().all()
    except SQLAlchemyError as e:
        logger.error(f"dashboard db error: {e}")
        raise DatabaseError(str(e), operation="dashboard")

    return success_response(
        {
            "stats": stats,
            "recent_messages": [
                {
                    "id": int(m["id"]),
                    "name": m["name"],
                    "email": m["email"],
                    "message": m["message"],
                    "created_at": isoformat(m["created_at"]),
                }
                for m in messages
            ],
            "recent_orders": [order_to_dict(o) for o in orders],
        }
    )
