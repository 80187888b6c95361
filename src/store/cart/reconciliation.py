"""Cart pricing reconciliation — relevance check and repricing of stale carts.

A cart is *relevant* when every stored item price still matches what the
store would charge right now:

- standalone items cost the current discounted price of an active product;
- each bundle in the cart is still on sale, the cart holds exactly its
  current members, and their prices add up to the bundle's current total;
- the cart total equals the sum of its item prices.

Reconciliation rebuilds the expected lines from current pricing and lets
the Cart aggregate apply the difference. It runs synchronously whenever an
active cart is read through the API and on explicit refresh.
"""

from datetime import datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from store.bundle.bundle import Bundle
from store.cart.cart import Cart, CartLine
from store.domain import store
from store.pricing.calculator import PriceCalculator, price_calculator
from store.pricing.lookup import discounted_price, find_product_price, is_purchasable

logger = structlog.get_logger(__name__)


def _find_bundle(bundle_id) -> Bundle | None:
    try:
        return current_domain.repository_for(Bundle).get(str(bundle_id))
    except ObjectNotFoundError:
        return None


class CartReconciler:
    """Compares carts against current pricing and repairs stale ones."""

    def __init__(self, calculator: PriceCalculator = price_calculator) -> None:
        self.calculator = calculator

    # -------------------------------------------------------------------
    # Relevance
    # -------------------------------------------------------------------
    def stale_reasons(self, cart: Cart, now: datetime | None = None) -> list[str]:
        """Why the cart no longer matches current pricing; empty when it does."""
        if not cart.is_active:
            return []

        reasons = []

        for item in cart.standalone_items():
            product = find_product_price(item.product_id)
            if not is_purchasable(product):
                reasons.append(f"product {item.product_id} is no longer on sale")
            elif self.calculator.are_prices_different(item.price, discounted_price(product, now)):
                reasons.append(f"price of product {item.product_id} changed")

        for bundle_id in cart.bundle_ids():
            bundle = _find_bundle(bundle_id)
            if bundle is None or not bundle.is_available(now):
                reasons.append(f"bundle {bundle_id} is no longer on sale")
            elif not self._bundle_group_matches(bundle, cart.items_of_bundle(bundle_id)):
                reasons.append(f"bundle {bundle_id} changed")

        if self.calculator.are_prices_different(cart.total_amount, cart.items_total()):
            reasons.append("cart total does not match its items")

        return reasons

    def is_relevant(self, cart: Cart, now: datetime | None = None) -> bool:
        return not self.stale_reasons(cart, now)

    def _bundle_group_matches(self, bundle: Bundle, items) -> bool:
        in_cart = {str(i.product_id) for i in items}
        if in_cart != set(bundle.member_ids):
            return False
        paid = self.calculator.calculate_total(i.price for i in items)
        return not self.calculator.are_prices_different(paid, bundle.total_price)

    # -------------------------------------------------------------------
    # Expected lines
    # -------------------------------------------------------------------
    def expected_lines(self, cart: Cart, now: datetime | None = None) -> list[CartLine]:
        """The items the cart should hold under current pricing.

        Bundles take precedence over standalone items for the same product.
        A bundle whose members overlap an earlier bundle in the cart is
        dropped as a whole.
        """
        lines: list[CartLine] = []
        claimed: set[str] = set()

        for bundle_id in cart.bundle_ids():
            bundle = _find_bundle(bundle_id)
            if bundle is None or not bundle.is_available(now):
                continue

            items = cart.items_of_bundle(bundle_id)
            if self._bundle_group_matches(bundle, items):
                group = [CartLine(str(i.product_id), i.price, bundle_id) for i in items]
            else:
                group = self._redistributed_lines(bundle)

            if any(line.product_id in claimed for line in group):
                continue
            lines.extend(group)
            claimed.update(line.product_id for line in group)

        for item in cart.standalone_items():
            product_id = str(item.product_id)
            if product_id in claimed:
                continue
            product = find_product_price(product_id)
            if not is_purchasable(product):
                continue
            lines.append(CartLine(product_id, discounted_price(product, now)))
            claimed.add(product_id)

        return lines

    def _redistributed_lines(self, bundle: Bundle) -> list[CartLine]:
        members = []
        for product_id in bundle.member_ids:
            product = find_product_price(product_id)
            members.append((product_id, product.price if product is not None else 0.0))

        shares = self.calculator.distribute_bundle_price(members, bundle.total_price)
        return [CartLine(product_id, share, str(bundle.id)) for product_id, share in shares]

    # -------------------------------------------------------------------
    # Reconcile
    # -------------------------------------------------------------------
    def reconcile(self, cart: Cart, now: datetime | None = None) -> bool:
        """Reprice a stale active cart in place. Returns True when it changed."""
        reasons = self.stale_reasons(cart, now)
        if not reasons:
            return False

        previous_total = cart.total_amount
        changed = cart.reconcile(self.expected_lines(cart, now))
        logger.info(
            "Cart reconciled",
            cart_id=str(cart.id),
            reasons=reasons,
            previous_total=previous_total,
            new_total=cart.total_amount,
        )
        return changed


cart_reconciler = CartReconciler()


@store.command(part_of="Cart")
class RefreshCart:
    """Bring an active cart in line with current pricing."""

    cart_id = Identifier(required=True)
    as_of = DateTime()  # Optional: defaults to now


@store.command_handler(part_of=Cart)
class RefreshCartHandler:
    @handle(RefreshCart)
    def refresh_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        if not cart.is_active:
            return False

        changed = cart_reconciler.reconcile(cart, command.as_of)
        if changed:
            repo.add(cart)
        return changed
