from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Dict, Any

from cart.pricing import parse_price, to_money

SHOW_ALL = "all"


@dataclass(frozen=True)
class CatalogEntry:
    """A menu card on the page; read-only input to the cart"""
    name: str
    unit_price: Decimal
    image_url: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_page(
        cls,
        name: str,
        price_text: Optional[str] = None,
        price_attr: Optional[str] = None,
        image_url: Optional[str] = None,
        category: Optional[str] = None,
    ) -> "CatalogEntry":
        """Build an entry from the attributes of a menu card."""
        return cls(
            name=(name or "").strip(),
            unit_price=parse_price(price_text, price_attr),
            image_url=image_url,
            category=category,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        """Build an entry from a /api/v1/menu item."""
        return cls(
            name=str(data.get("name", "")).strip(),
            unit_price=to_money(data.get("unit_price")),
            image_url=data.get("image_url"),
            category=data.get("category"),
        )


@dataclass(frozen=True)
class FilteredEntry:
    entry: CatalogEntry
    visible: bool


def filter_catalog(entries: Iterable[CatalogEntry], category: str = SHOW_ALL) -> List[FilteredEntry]:
    """Mark each entry visible or hidden for a category tab; order is kept."""
    return [
        FilteredEntry(entry, category == SHOW_ALL or entry.category == category)
        for entry in entries
    ]
