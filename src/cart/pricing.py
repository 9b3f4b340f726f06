"""
Money helpers for the cart

Prices live as ``Decimal`` amounts quantized to cents. Anything that cannot be
read as a finite, non-negative number up to ``MAX_AMOUNT`` becomes zero: a
broken price on one menu card must never stop the rest of the page from working.
"""

import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest amount whose float form (the checkout JSON number) still reads back to the cent
MAX_AMOUNT = Decimal("9999999999999.99")

# Leading numeric prefix, the way a browser's parseFloat reads it
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')
_NOT_PRICE_CHARS = re.compile(r'[^\d.]')

CURRENCY_FORMATS = {
    'USD': {'symbol': '$', 'decimal_places': 2, 'symbol_position': 'before'},
    'EUR': {'symbol': '€', 'decimal_places': 2, 'symbol_position': 'after'},
    'GBP': {'symbol': '£', 'decimal_places': 2, 'symbol_position': 'before'},
}


def to_money(value: Any) -> Decimal:
    """Coerce a number-ish value to a non-negative cent-accurate Decimal."""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or value is None:
        return ZERO
    else:
        try:
            # str() keeps 4.5 as 4.5 instead of its binary expansion
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO

    if not amount.is_finite() or amount < 0:
        return ZERO
    try:
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context can hold
        return ZERO
    if amount > MAX_AMOUNT:
        logger.warning(f"Price {amount} above {MAX_AMOUNT}; using 0.00")
        return ZERO
    return amount


def _parse_float_prefix(text: str) -> Optional[Decimal]:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def parse_price(price_text: Optional[str], price_attr: Optional[str] = None) -> Decimal:
    """
    Read a catalog price

    Args:
        price_text: Displayed price, e.g. "$4.50" or "4,50 €"
        price_attr: Machine-readable price attribute; takes precedence when
            present and non-empty

    Examples:
        parse_price("$4.50") -> Decimal("4.50")
        parse_price("$4.50", "5") -> Decimal("5.00")
        parse_price("Market price") -> Decimal("0.00")
    """
    if price_attr:
        amount = _parse_float_prefix(price_attr)
    else:
        amount = _parse_float_prefix(_NOT_PRICE_CHARS.sub('', price_text or ''))

    if amount is None:
        logger.warning(f"Unreadable price (text={price_text!r}, attr={price_attr!r}); using 0.00")
        return ZERO
    return to_money(amount)


def to_cents(amount: Decimal) -> int:
    return int(to_money(amount) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def format_money(amount: Any, currency: str = 'USD') -> str:
    """
    Format money amount for display

    Examples:
        format_money(Decimal("12")) -> "$12.00"
        format_money(Decimal("3.5"), 'EUR') -> "3.50€"
    """
    currency_config = CURRENCY_FORMATS.get(currency, CURRENCY_FORMATS['USD'])
    formatted_amount = f"{to_money(amount):.{currency_config['decimal_places']}f}"

    if currency_config['symbol_position'] == 'before':
        return f"{currency_config['symbol']}{formatted_amount}"
    return f"{formatted_amount}{currency_config['symbol']}"
