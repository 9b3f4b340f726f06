from cart.models import LineItem, CartSnapshot
from cart.engine import CartEngine
from cart.controller import CartController
from cart.catalog import CatalogEntry, filter_catalog
from cart.storage import SessionStorage
from cart.transfer import load_checkout_items

__all__ = [
    "LineItem", "CartSnapshot",
    "CartEngine",
    "CartController",
    "CatalogEntry", "filter_catalog",
    "SessionStorage",
    "load_checkout_items",
]
