"""Snapshot pricing for cart lines.

Cart lines arrive from a checkout UI that may send partial or malformed data,
so every field is coerced rather than rejected:

* price: two fraction digits, ROUND_HALF_UP, never negative (bad input -> 0.00)
* quantity: whole units, at least 1 (bad input -> 1)
* name: falls back to "Item"

The order total is the sum of the already-rounded line totals, which keeps it
equal to what is persisted line by line.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any

from storefront.exceptions import InvalidRequest

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
DEFAULT_ITEM_NAME = "Item"
MAX_NAME_LENGTH = 255

# Inputs at or above 10**12 are treated as malformed.
MAX_MAGNITUDE = 12

_MONEY = Context(prec=40, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class NormalizedLine:
    """A cart line with validated snapshot price and quantity."""

    product_id: str | None
    name: str
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return round2(_MONEY.multiply(self.price, Decimal(self.quantity)))


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENTS, context=_MONEY)


def _to_decimal(raw: Any) -> Decimal | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or (value and value.adjusted() >= MAX_MAGNITUDE):
        return None
    return value


def to_money(raw: Any) -> Decimal:
    """Coerce a raw price into non-negative two-digit money."""
    value = _to_decimal(raw)
    if value is None or value < 0:
        return ZERO
    # copy_abs folds "-0" into "0.00"
    return round2(value).copy_abs()


def to_quantity(raw: Any) -> int:
    """Coerce a raw quantity into a whole number of units, at least 1."""
    value = _to_decimal(raw)
    if value is None:
        return 1
    return max(1, int(value.to_integral_value(rounding=ROUND_DOWN)))


def _to_product_id(raw: Any) -> str | None:
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    return text or None


def _to_name(raw: Any) -> str:
    text = str(raw).strip() if raw is not None else ""
    return text[:MAX_NAME_LENGTH] if text else DEFAULT_ITEM_NAME


def normalize_line(raw: Any) -> NormalizedLine:
    """Build a `NormalizedLine` from unvalidated input. Never raises."""
    if not isinstance(raw, Mapping):
        raw = {}

    return NormalizedLine(
        product_id=_to_product_id(raw.get("product_id")),
        name=_to_name(raw.get("name")),
        price=to_money(raw.get("price")),
        quantity=to_quantity(raw.get("quantity")),
    )


def normalize_lines(items: Iterable[Any]) -> list[NormalizedLine]:
    return [normalize_line(item) for item in items]


def order_total(lines: Iterable[NormalizedLine]) -> Decimal:
    """Sum the rounded line totals into a two-digit grand total."""
    lines = list(lines)
    if not lines:
        raise InvalidRequest({"items": ["Cart is empty"]})

    total = ZERO
    for line in lines:
        total = _MONEY.add(total, line.line_total)
    return round2(total)
