"""Price calculator — discounted prices, totals and bundle price distribution.

Pure functions over plain numbers and discount objects; nothing here touches
a repository. Arithmetic is done in ``Decimal`` and results are handed back
as floats rounded to cents.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from shared.clock import naive_utc, utcnow

CENT = Decimal("0.01")
MINIMUM_PRICE = CENT
PRICE_TOLERANCE = 0.01

PERCENTAGE = "Percentage"
FIXED = "Fixed"


def _to_decimal(value) -> Decimal:
    return Decimal(str(value or 0))


def _round_cents(value) -> Decimal:
    return _to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _to_cents(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def is_discount_active(discount, now: datetime) -> bool:
    """A discount applies when ``now`` lies inside its (open-ended) window."""
    now = naive_utc(now)
    start = naive_utc(discount.start_date)
    end = naive_utc(discount.end_date)
    if start is not None and now < start:
        return False
    if end is not None and now > end:
        return False
    return True


class PriceCalculator:
    """Computes prices the way a cart must show them."""

    def __init__(self, tolerance: float = PRICE_TOLERANCE) -> None:
        self.tolerance = tolerance

    def apply_discount(self, original_price: float, discounts: Iterable, now: datetime | None = None) -> float:
        """Return ``original_price`` with every active discount applied.

        Discounts stack and each one is computed against the original price,
        not the running one. A price pushed below zero is clamped to 0.01.
        """
        now = now or utcnow()
        original = _to_decimal(original_price)
        price = original

        for discount in discounts:
            if not is_discount_active(discount, now):
                continue

            value = _to_decimal(discount.discount_value)
            if discount.discount_type == PERCENTAGE:
                price -= original * value / 100
            elif discount.discount_type == FIXED:
                price -= value

            if price < 0:
                price = MINIMUM_PRICE

        return _to_cents(price)

    def calculate_total(self, prices: Iterable[float]) -> float:
        return _to_cents(sum((_to_decimal(p) for p in prices), Decimal("0")))

    def are_prices_different(self, first: float, second: float, tolerance: float | None = None) -> bool:
        """Compare cent-rounded decimals; a difference of exactly ``tolerance`` is no difference."""
        tolerance = self.tolerance if tolerance is None else tolerance
        return abs(_round_cents(first) - _round_cents(second)) > _to_decimal(tolerance)

    def distribute_bundle_price(
        self, members: Sequence[tuple[str, float]], total_price: float
    ) -> list[tuple[str, float]]:
        """Split ``total_price`` over bundle members in proportion to their prices.

        ``members`` is an ordered list of ``(product_id, original_price)``.
        Each share is rounded to cents and the last member takes whatever is
        left, so the shares always add up to the total exactly. When every
        member is free the total is split evenly.
        """
        if not members:
            return []

        total = _to_decimal(total_price)
        originals = [_to_decimal(price) for _, price in members]
        original_sum = sum(originals, Decimal("0"))
        count = len(members)

        shares: list[Decimal] = []
        allocated = Decimal("0")
        for index, original in enumerate(originals):
            if index == count - 1:
                share = total - allocated
            elif original_sum == 0:
                share = (total / count).quantize(CENT, rounding=ROUND_HALF_UP)
            else:
                share = (total * original / original_sum).quantize(CENT, rounding=ROUND_HALF_UP)
            # Rounding up must never leave the remaining members a negative share
            share = min(share, total - allocated)
            allocated += share
            shares.append(share)

        return [(product_id, _to_cents(share)) for (product_id, _), share in zip(members, shares, strict=True)]


price_calculator = PriceCalculator()
