from dataclasses import dataclass, field, replace
from typing import Tuple, Optional, Dict, Any
from decimal import Decimal

ZERO = Decimal("0.00")


@dataclass
class LineItem:
    """A single product entry in the cart, keyed by its display name"""
    name: str
    unit_price: Decimal
    quantity: int = 1
    image_url: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        """unit_price * quantity"""
        return self.unit_price * self.quantity

    def copy(self) -> "LineItem":
        return replace(self)

    def to_transfer_dict(self) -> Dict[str, Any]:
        """Shape handed to the checkout view"""
        return {
            "name": self.name,
            "unitPrice": float(self.unit_price),
            "quantity": self.quantity,
            "imageUrl": self.image_url,
        }


@dataclass(frozen=True)
class CartSnapshot:
    """Read-only view of the cart at one point in time"""
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    total: Decimal = ZERO
    badge_count: int = 0

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0

    def get(self, name: str) -> Optional[LineItem]:
        return next((item for item in self.items if item.name == name), None)
