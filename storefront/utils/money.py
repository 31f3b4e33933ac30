# storefront/utils/money.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Decimal rounded to cents (half-up)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(items: Iterable) -> Decimal:
    #snapshot prices only, never the live product price
    return to_money(sum((to_money(i.price_at_moment) * i.quantity for i in items), ZERO))
