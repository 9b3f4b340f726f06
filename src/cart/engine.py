from typing import Callable, List, Optional, Any
import logging

from cart.models import CartSnapshot, LineItem, ZERO
from cart.notifications import Notifier
from cart.pricing import to_money
from cart.transfer import serialize_items
from core.exceptions import CheckoutEmptyError

logger = logging.getLogger(__name__)

ChangeListener = Callable[[CartSnapshot], None]


class CartEngine:
    """
    Shopping cart state for one browser session

    Responsibilities:
    - Keep one line item per product name, in first-added order
    - Drop an item as soon as its quantity would reach zero
    - Recompute total and badge count from scratch on every read
    - Push a fresh snapshot to listeners after every mutation
    """

    def __init__(self, notifier: Optional[Notifier] = None):
        self._items: List[LineItem] = []
        self._listeners: List[ChangeListener] = []
        self.notifier = notifier

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback run with the new snapshot after each change"""
        self._listeners.append(listener)

    def _find(self, name: str) -> Optional[LineItem]:
        return next((item for item in self._items if item.name == name), None)

    def _changed(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in self._listeners:
            listener(snapshot)

    def add_item(self, name: str, unit_price: Any, image_url: Optional[str] = None) -> Optional[LineItem]:
        """
        Add one unit of a product.

        An existing line item with the same name has its quantity bumped; the
        price and image of the first add are kept. A blank name is ignored and
        returns None, since the checkout view could not read it back.
        """
        name = (name or "").strip()
        if not name:
            logger.warning("Ignoring add of an item with a blank name")
            return None

        existing = self._find(name)
        if existing:
            existing.quantity += 1
            item = existing
        else:
            item = LineItem(name=name, unit_price=to_money(unit_price), image_url=image_url)
            self._items.append(item)

        logger.info(f"Added {name!r} to cart (qty {item.quantity})")
        self._changed()
        if self.notifier:
            self.notifier.notify(f"{name} added to cart ✔")
        return item.copy()

    def increment(self, name: str) -> bool:
        item = self._find(name)
        if not item:
            logger.debug(f"increment: {name!r} not in cart")
            return False
        item.quantity += 1
        self._changed()
        return True

    def decrement(self, name: str) -> bool:
        item = self._find(name)
        if not item:
            logger.debug(f"decrement: {name!r} not in cart")
            return False
        if item.quantity > 1:
            item.quantity -= 1
        else:
            self._items.remove(item)
        self._changed()
        return True

    def remove(self, name: str) -> bool:
        item = self._find(name)
        if not item:
            return False
        self._items.remove(item)
        self._changed()
        return True

    def clear(self) -> None:
        self._items.clear()
        self._changed()

    @property
    def is_empty(self) -> bool:
        return not self._items

    def snapshot(self) -> CartSnapshot:
        items = tuple(item.copy() for item in self._items)
        return CartSnapshot(
            items=items,
            total=sum((item.subtotal for item in items), ZERO),
            badge_count=sum(item.quantity for item in items),
        )

    def serialize_for_checkout(self) -> str:
        """
        JSON transfer representation of the current line items.

        Raises:
            CheckoutEmptyError: the cart has no line items
        """
        if not self._items:
            raise CheckoutEmptyError()
        return serialize_items(self._items)
