"""Cart aggregate (CQRS) — the products a user is about to buy, with prices.

Unlike a plain shopping list, every cart item stores the price the user will
pay: the discounted price for a standalone product, or the distributed
share for a product that came in a bundle. Those prices go stale when
discounts or bundles change, so the cart can be reconciled against a fresh
set of expected lines (see ``store.cart.reconciliation``).

State Machine:
    ACTIVE → ARCHIVED | ABANDONED
    ABANDONED → ACTIVE (recovery)
    ARCHIVED → (terminal)
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String

from store.cart.events import (
    CartAbandoned,
    CartArchived,
    CartBundleAdded,
    CartCreated,
    CartItemAdded,
    CartItemRemoved,
    CartReconciled,
    CartRecovered,
)
from store.domain import store
from store.pricing.calculator import price_calculator


class CartStatus(Enum):
    ACTIVE = "Active"
    ARCHIVED = "Archived"
    ABANDONED = "Abandoned"


@dataclass(frozen=True)
class CartLine:
    """What a cart item should look like under current pricing."""

    product_id: str
    price: float
    bundle_id: str | None = None


@store.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)
    bundle_id = Identifier()  # Set when the item came in with a bundle
    added_at = DateTime()


@store.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    total_amount = Float(default=0.0, min_value=0.0)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    last_modified_at = DateTime()

    @invariant.post
    def product_can_appear_only_once(self):
        product_ids = [str(i.product_id) for i in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear in the cart only once"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        cart = cls(
            user_id=user_id,
            status=CartStatus.ACTIVE.value,
            total_amount=0.0,
            created_at=now,
            last_modified_at=now,
        )
        cart.raise_(CartCreated(cart_id=str(cart.id), user_id=str(user_id), created_at=now))
        return cart

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_active(self):
        return CartStatus(self.status) == CartStatus.ACTIVE

    def contains_product(self, product_id):
        return any(str(i.product_id) == str(product_id) for i in self.items)

    def bundle_ids(self):
        """Distinct bundle ids in the order their items were added."""
        seen = []
        for item in self.items:
            if item.bundle_id and str(item.bundle_id) not in seen:
                seen.append(str(item.bundle_id))
        return seen

    def items_of_bundle(self, bundle_id):
        return [i for i in self.items if i.bundle_id and str(i.bundle_id) == str(bundle_id)]

    def standalone_items(self):
        return [i for i in self.items if not i.bundle_id]

    def items_total(self):
        return price_calculator.calculate_total(i.price for i in self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, price):
        """Add a standalone product at the price the user will pay."""
        self._ensure_active("Items can only be added to an active cart")
        if self.contains_product(product_id):
            raise ValidationError({"product_id": ["Product is already in the cart"]})

        now = datetime.now(UTC)
        item = CartItem(product_id=product_id, price=price, added_at=now)

        with atomic_change(self):
            self.add_items(item)
            self._recalculate(now)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                price=item.price,
                total_amount=self.total_amount,
            )
        )
        return str(item.id)

    def add_bundle(self, bundle_id, shares):
        """Add every bundle member at its distributed price.

        Args:
            bundle_id: The bundle the items come from.
            shares: List of ``(product_id, distributed_price)`` pairs.
        """
        self._ensure_active("Bundles can only be added to an active cart")
        if not shares:
            raise ValidationError({"bundle_id": ["Bundle has no products"]})
        if self.items_of_bundle(bundle_id):
            raise ValidationError({"bundle_id": ["Bundle is already in the cart"]})

        duplicates = [pid for pid, _ in shares if self.contains_product(pid)]
        if duplicates:
            raise ValidationError({"bundle_id": [f"Products already in the cart: {', '.join(duplicates)}"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            for product_id, price in shares:
                self.add_items(CartItem(product_id=product_id, price=price, bundle_id=bundle_id, added_at=now))
            self._recalculate(now)

        self.raise_(
            CartBundleAdded(
                cart_id=str(self.id),
                bundle_id=str(bundle_id),
                product_ids=json.dumps([str(pid) for pid, _ in shares]),
                total_amount=self.total_amount,
            )
        )

    def remove_item(self, item_id):
        """Remove an item; removing one bundle item removes the whole bundle."""
        self._ensure_active("Items can only be removed from an active cart")

        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})

        to_remove = self.items_of_bundle(item.bundle_id) if item.bundle_id else [item]

        now = datetime.now(UTC)
        with atomic_change(self):
            for removed in to_remove:
                self.remove_items(removed)
            self._recalculate(now)

        for removed in to_remove:
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    item_id=str(removed.id),
                    product_id=str(removed.product_id),
                    bundle_id=str(removed.bundle_id) if removed.bundle_id else None,
                    total_amount=self.total_amount,
                )
            )
        return len(to_remove)

    def recalculate_total(self):
        self._ensure_active("Only active carts can be recalculated")
        self._recalculate(datetime.now(UTC))

    def _recalculate(self, now):
        self.total_amount = self.items_total()
        self.last_modified_at = now

    # -------------------------------------------------------------------
    # Reconciliation
    # -------------------------------------------------------------------
    def reconcile(self, expected_lines):
        """Make the cart match ``expected_lines``.

        Items with no matching line are dropped, matching items are repriced
        when their price drifted, and lines with no item are added. Items
        match on product id and bundle id together. Returns True when
        anything changed.
        """
        self._ensure_active("Only active carts can be reconciled")

        expected = {(line.product_id, line.bundle_id): line.price for line in expected_lines}
        previous_total = self.total_amount or 0.0
        repriced = removed = added = 0
        now = datetime.now(UTC)

        with atomic_change(self):
            for item in list(self.items):
                key = (str(item.product_id), str(item.bundle_id) if item.bundle_id else None)
                if key not in expected:
                    self.remove_items(item)
                    removed += 1
                    continue

                price = expected.pop(key)
                if price_calculator.are_prices_different(item.price, price):
                    item.price = price
                    repriced += 1

            for (product_id, bundle_id), price in expected.items():
                self.add_items(CartItem(product_id=product_id, price=price, bundle_id=bundle_id, added_at=now))
                added += 1

            new_total = self.items_total()
            total_drifted = price_calculator.are_prices_different(previous_total, new_total)
            changed = bool(repriced or removed or added or total_drifted)
            if changed:
                self.total_amount = new_total
                self.last_modified_at = now

        if changed:
            self.raise_(
                CartReconciled(
                    cart_id=str(self.id),
                    previous_total=previous_total,
                    new_total=self.total_amount,
                    repriced_count=repriced,
                    removed_count=removed,
                    added_count=added,
                )
            )
        return changed

    # -------------------------------------------------------------------
    # Cart lifecycle
    # -------------------------------------------------------------------
    def archive(self):
        self._ensure_active("Only active carts can be archived")

        now = datetime.now(UTC)
        self.status = CartStatus.ARCHIVED.value
        self.last_modified_at = now

        self.raise_(CartArchived(cart_id=str(self.id), archived_at=now))

    def abandon(self):
        self._ensure_active("Only active carts can be abandoned")

        now = datetime.now(UTC)
        self.status = CartStatus.ABANDONED.value
        self.last_modified_at = now

        self.raise_(CartAbandoned(cart_id=str(self.id), user_id=str(self.user_id), abandoned_at=now))

    def recover(self):
        if CartStatus(self.status) != CartStatus.ABANDONED:
            raise ValidationError({"status": ["Only abandoned carts can be recovered"]})

        now = datetime.now(UTC)
        self.status = CartStatus.ACTIVE.value
        self.last_modified_at = now

        self.raise_(CartRecovered(cart_id=str(self.id), user_id=str(self.user_id), recovered_at=now))

    def _ensure_active(self, message):
        if not self.is_active:
            raise ValidationError({"status": [message]})
