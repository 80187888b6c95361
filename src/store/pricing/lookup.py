"""Current-price lookups backed by the ProductPrice list and Discount aggregates."""

from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from store.discount.discount import Discount
from store.pricing.calculator import price_calculator
from store.pricing.product_price import ProductPrice


def find_product_price(product_id) -> ProductPrice | None:
    try:
        return current_domain.repository_for(ProductPrice).get(str(product_id))
    except ObjectNotFoundError:
        return None


def discounts_for_product(product_id) -> list[Discount]:
    """Non-deleted discounts assigned to the product, active or not."""
    discounts = current_domain.repository_for(Discount)._dao.query.filter(is_deleted=False).limit(None).all().items
    return [d for d in discounts if d.covers(product_id)]


def discounted_price(product: ProductPrice, now: datetime | None = None) -> float:
    return price_calculator.apply_discount(product.price, discounts_for_product(product.product_id), now)


def is_purchasable(product: ProductPrice | None) -> bool:
    return product is not None and bool(product.is_active)
