"""
Checkout transfer representation

The cart page writes a JSON list of
``{"name", "unitPrice", "quantity", "imageUrl"}`` objects to session storage
and navigates to the checkout view, which reads it back with
``load_checkout_items``.
"""

import json
import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from cart.models import LineItem
from cart.pricing import to_money
from cart.storage import SessionStorage

logger = logging.getLogger(__name__)


class CheckoutLineItem(BaseModel):
    """One line item as handed to the checkout view"""
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Latte",
                "unitPrice": 4.5,
                "quantity": 2,
                "imageUrl": "img/latte.jpg"
            }
        },
    )

    name: str = Field(min_length=1, description="Product display name")
    unit_price: Decimal = Field(alias="unitPrice", ge=0, description="Price per unit")
    quantity: int = Field(ge=1, description="Units of this product")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Name cannot be blank')
        return v

    def to_line_item(self) -> LineItem:
        return LineItem(
            name=self.name,
            unit_price=to_money(self.unit_price),
            quantity=self.quantity,
            image_url=self.image_url,
        )


_payload_adapter = TypeAdapter(List[CheckoutLineItem])


def serialize_items(items: Iterable[LineItem]) -> str:
    return json.dumps([item.to_transfer_dict() for item in items])


def deserialize_items(payload: str) -> List[LineItem]:
    """
    Parse a transfer payload.

    Raises:
        pydantic.ValidationError: payload is not a list of valid line items
    """
    return [entry.to_line_item() for entry in _payload_adapter.validate_json(payload)]


def load_checkout_items(storage: SessionStorage, key: str = "demoCart") -> List[LineItem]:
    """Checkout-view side: read the handed-off cart, ignoring malformed state."""
    payload = storage.get_item(key)
    if not payload:
        return []
    try:
        return deserialize_items(payload)
    except ValueError as e:
        logger.warning(f"Ignoring malformed checkout state under {key!r}: {e}")
        return []
