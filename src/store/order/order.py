"""Order aggregate (CQRS) — a snapshot of a cart at checkout plus its payment state.

Order items copy the final prices the user saw in the cart; later price
changes never touch a placed order.

State Machine:
    PENDING → PAID | FAILED | CANCELLED
    FAILED → PENDING (retry) | CANCELLED
    PAID → REFUNDED
    CANCELLED, REFUNDED → (terminal)
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, String

from store.domain import store
from store.order.events import (
    OrderCancelled,
    OrderDeleted,
    OrderPaid,
    OrderPaymentFailed,
    OrderPlaced,
    OrderRefunded,
    OrderReopened,
)
from store.pricing.calculator import price_calculator


class OrderStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.FAILED, OrderStatus.CANCELLED},
    OrderStatus.FAILED: {OrderStatus.PENDING, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: set(),
    OrderStatus.REFUNDED: set(),
}


@store.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_type = String(max_length=20)
    game_id = Identifier()  # Base game, for addons
    final_price = Float(required=True, min_value=0.0)
    bundle_id = Identifier()


@store.aggregate
class Order:
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    is_deleted = Boolean(default=False)
    order_date = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, cart_id, user_id, items):
        """Create an order from cart lines.

        Args:
            items: List of dicts with product_id, product_type, game_id,
                final_price and bundle_id.
        """
        now = datetime.now(UTC)
        order = cls(
            cart_id=cart_id,
            user_id=user_id,
            items=[OrderItem(**item) for item in items],
            total_amount=price_calculator.calculate_total(item["final_price"] for item in items),
            status=OrderStatus.PENDING.value,
            order_date=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                cart_id=str(cart_id),
                user_id=str(user_id),
                items=json.dumps(order._item_snapshot(include_bundle=True)),
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, target):
        """Move the order along its state machine, raising the matching event."""
        target = OrderStatus(target)
        current = OrderStatus(self.status)
        if self.is_deleted:
            raise ValidationError({"order": ["Order has been deleted"]})
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.PAID:
            self.raise_(
                OrderPaid(
                    order_id=str(self.id),
                    user_id=str(self.user_id),
                    items=json.dumps(self._item_snapshot()),
                    total_amount=self.total_amount,
                    paid_at=now,
                )
            )
        elif target == OrderStatus.FAILED:
            self.raise_(OrderPaymentFailed(order_id=str(self.id), user_id=str(self.user_id), failed_at=now))
        elif target == OrderStatus.PENDING:
            self.raise_(OrderReopened(order_id=str(self.id), reopened_at=now))
        elif target == OrderStatus.CANCELLED:
            self.raise_(OrderCancelled(order_id=str(self.id), previous_status=current.value, cancelled_at=now))
        elif target == OrderStatus.REFUNDED:
            self.raise_(
                OrderRefunded(
                    order_id=str(self.id),
                    user_id=str(self.user_id),
                    items=json.dumps(self._item_snapshot()),
                    refunded_at=now,
                )
            )

    def mark_paid(self):
        self.change_status(OrderStatus.PAID)

    def mark_failed(self):
        self.change_status(OrderStatus.FAILED)

    def refund(self):
        self.change_status(OrderStatus.REFUNDED)

    # -------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------
    def delete(self):
        if self.is_deleted:
            raise ValidationError({"order": ["Order has already been deleted"]})
        if OrderStatus(self.status) == OrderStatus.PAID:
            raise ValidationError({"status": ["Paid orders cannot be deleted"]})

        now = datetime.now(UTC)
        self.is_deleted = True
        self.updated_at = now

        self.raise_(OrderDeleted(order_id=str(self.id), deleted_at=now))

    def _item_snapshot(self, include_bundle=False):
        snapshot = []
        for item in self.items:
            entry = {
                "product_id": str(item.product_id),
                "product_type": item.product_type,
                "game_id": str(item.game_id) if item.game_id else None,
                "final_price": item.final_price,
            }
            if include_bundle:
                entry["bundle_id"] = str(item.bundle_id) if item.bundle_id else None
            snapshot.append(entry)
        return snapshot
