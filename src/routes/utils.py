import hmac
from functools import wraps
from typing import Optional

from flask import jsonify, request
from datetime import datetime, timezone

from core.config import config
from core.exceptions import UnauthorizedError, ValidationError


def success_response(data, message: Optional[str] = None, status: int = 200):
    """Consistent success response envelope."""
    response = {
        "success": True,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if message:
        response["message"] = message
    return jsonify(response), status


def parse_int(
    v,
    default=None,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
    field_name: str = "value",
) -> Optional[int]:
    """Parse an integer with optional range validation."""
    if v is None or v == "":
        return default
    try:
        result = int(v)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}: must be a valid integer")
    if min_val is not None and result < min_val:
        raise ValidationError(f"{field_name} must be at least {min_val}")
    if max_val is not None and result > max_val:
        raise ValidationError(f"{field_name} cannot exceed {max_val}")
    return result


def isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


def require_admin_token(view):
    """Gate a view behind the shared admin token (header or ?token=)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        supplied = request.headers.get(config.security.token_header) or request.args.get("token")
        if not supplied:
            raise UnauthorizedError(f"Missing {config.security.token_header} header.")
        if not hmac.compare_digest(supplied.encode(), config.security.admin_token.encode()):
            raise UnauthorizedError("Invalid admin token.")
        return view(*args, **kwargs)

    return wrapper
