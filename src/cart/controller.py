import logging
from typing import Callable, Iterable, List, Optional

from cart.catalog import SHOW_ALL, CatalogEntry, FilteredEntry, filter_catalog
from cart.engine import CartEngine
from cart.models import CartSnapshot
from cart.notifications import Notifier, ToastNotifier
from cart.storage import SessionStorage
from cart.view import CartRenderer, project_snapshot
from core.config import CartConfig
from core.exceptions import CheckoutEmptyError

logger = logging.getLogger(__name__)


class CartController:
    """
    Page controller for the menu page.

    Owns the session's CartEngine and turns user actions (add-to-cart
    buttons, the +/- controls, clear, checkout, dropdown toggling, category
    tabs) into engine calls. Every engine change is projected and handed to
    the renderer.
    """

    def __init__(
        self,
        renderer: CartRenderer,
        storage: SessionStorage,
        navigate: Callable[[str], None],
        notifier: Optional[Notifier] = None,
        settings: Optional[CartConfig] = None,
        catalog: Iterable[CatalogEntry] = (),
    ):
        self.settings = settings or CartConfig()
        self.renderer = renderer
        self.storage = storage
        self.navigate = navigate
        self.notifier = notifier or ToastNotifier(self.settings.toast_seconds)
        self.catalog: List[CatalogEntry] = list(catalog)
        self.active_category = SHOW_ALL
        self.is_open = False

        self.cart = CartEngine(notifier=self.notifier)
        self.cart.subscribe(self._render)
        self._render(self.cart.snapshot())

    def _render(self, snapshot: CartSnapshot) -> None:
        self.renderer.render(project_snapshot(snapshot, self.settings.currency))

    # Catalog

    def select_category(self, category: str) -> List[FilteredEntry]:
        self.active_category = category or SHOW_ALL
        return filter_catalog(self.catalog, self.active_category)

    # Cart actions

    def add_to_cart(self, entry: CatalogEntry) -> None:
        if self.cart.add_item(entry.name, entry.unit_price, entry.image_url) is not None:
            self.open()

    def increase(self, name: str) -> None:
        self.cart.increment(name)

    def decrease(self, name: str) -> None:
        self.cart.decrement(name)

    def remove(self, name: str) -> None:
        self.cart.remove(name)

    def clear(self) -> None:
        self.cart.clear()

    def show_item_details(self, name: str) -> None:
        item = self.cart.snapshot().get(name)
        if item:
            self.notifier.notify(f"Order Details: {item.name} - Qty: {item.quantity}")

    def checkout(self) -> Optional[str]:
        """
        Hand the cart to the checkout view.

        Returns the navigation target, or None when the cart is empty (the
        user is told, storage is left alone and nothing navigates).
        """
        try:
            payload = self.cart.serialize_for_checkout()
        except CheckoutEmptyError as e:
            self.notifier.notify(e.message)
            return None

        self.storage.set_item(self.settings.storage_key, payload)
        logger.info(f"Checkout with {self.cart.snapshot().badge_count} units")
        self.navigate(self.settings.checkout_url)
        return self.settings.checkout_url

    # Dropdown

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> bool:
        self.is_open = not self.is_open
        return self.is_open

    def handle_outside_click(self) -> None:
        self.close()

    def handle_key(self, key: str) -> None:
        if key == "Escape":
            self.close()
