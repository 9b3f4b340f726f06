# Re-export all models from a single entry point so the rest of the app
# can import cleanly:
#   from models import Order, ContactMessage
#
# Importing all models here also ensures they are registered with Base.metadata
# before any call to Base.metadata.create_all().

from models.contact import ContactMessage
from models.menu import MenuItem
from models.order import ORDER_STATUSES, Order

__all__ = [
    "ContactMessage",
    "MenuItem",
    "Order",
    "ORDER_STATUSES",
]
