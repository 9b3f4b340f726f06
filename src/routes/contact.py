import logging
from datetime import datetime, timezone

from flask import Blueprint, redirect, request
from marshmallow import ValidationError
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError

from db import get_connection
from models import ContactMessage
from routes.schemas import ContactSchema

logger = logging.getLogger(__name__)

contact_bp = Blueprint("contact", __name__)

_contact_schema = ContactSchema()


@contact_bp.route("/submit-contact", methods=["POST"])
def submit_contact():
    """
    Handle the native HTML contact form.

    The browser posts form-encoded name/email/message and is redirected back
    to the contact section with a status flag the page reads.
    """
    try:
        data = _contact_schema.load(request.form.to_dict())
    except ValidationError as err:
        logger.info(f"Rejected contact form: {err.messages}")
        return redirect("/?status=invalid#contact")

    try:
        with get_connection() as conn:
            conn.execute(
                insert(ContactMessage.__table__).values(
                    name=data["name"],
                    email=data["email"],
                    message=data["message"],
                    created_at=datetime.now(timezone.utc),
                )
            )
            conn.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database insertion error: {e}")
        return "Form submission failed due to a server error.", 500

    logger.info(f"Contact message stored from {data['email']}")
    return redirect("/?status=success#contact")
