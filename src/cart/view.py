from dataclasses import dataclass
from typing import List, Optional, Tuple

from cart.models import CartSnapshot
from cart.pricing import format_money


@dataclass(frozen=True)
class CartRow:
    """One rendered line in the cart dropdown"""
    name: str
    quantity: int
    price_display: str
    image_url: Optional[str] = None


@dataclass(frozen=True)
class CartView:
    rows: Tuple[CartRow, ...]
    total_display: str
    badge: str
    show_empty: bool


def project_snapshot(snapshot: CartSnapshot, currency: str = "USD") -> CartView:
    """Pure projection of a cart snapshot onto what the dropdown shows."""
    rows = tuple(
        CartRow(
            name=item.name,
            quantity=item.quantity,
            price_display=format_money(item.subtotal, currency),
            image_url=item.image_url,
        )
        for item in snapshot.items
    )
    return CartView(
        rows=rows,
        total_display=f"Total: {format_money(snapshot.total, currency)}",
        badge=str(snapshot.badge_count),
        show_empty=snapshot.is_empty,
    )


class CartRenderer:
    """Consumes projected views; subclasses draw them somewhere"""

    def render(self, view: CartView) -> None:
        raise NotImplementedError


class RecordingRenderer(CartRenderer):
    """Keeps every rendered view, newest last"""

    def __init__(self):
        self.views: List[CartView] = []

    @property
    def current(self) -> Optional[CartView]:
        return self.views[-1] if self.views else None

    def render(self, view: CartView) -> None:
        self.views.append(view)
