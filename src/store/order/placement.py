"""Order placement — turns a user's active cart into a pending order.

The cart must be priced correctly at the moment of checkout. A stale cart
is rejected instead of being silently repriced, so the user always pays
the amount they last saw; reading the cart again reconciles it.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from store.cart.cart import Cart
from store.cart.reconciliation import cart_reconciler
from store.domain import store
from store.order.order import Order
from store.pricing.lookup import find_product_price
from store.projections.deactivated_users import DeactivatedUser

logger = structlog.get_logger(__name__)


@store.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)


def _ensure_user_can_order(user_id):
    try:
        current_domain.repository_for(DeactivatedUser).get(str(user_id))
    except ObjectNotFoundError:
        return
    raise ValidationError({"user_id": ["User account is deactivated"]})


@store.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        _ensure_user_can_order(command.user_id)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get(command.cart_id)

        if str(cart.user_id) != str(command.user_id):
            raise ValidationError({"cart_id": ["Cart does not belong to this user"]})
        if not cart.is_active:
            raise ValidationError({"cart_id": ["Only an active cart can be checked out"]})
        if not cart.items:
            raise ValidationError({"cart_id": ["Cannot place an order for an empty cart"]})

        reasons = cart_reconciler.stale_reasons(cart)
        if reasons:
            logger.warning("Rejected checkout of stale cart", cart_id=str(cart.id), reasons=reasons)
            raise ValidationError({"cart_id": ["Cart prices are out of date; reload the cart and try again"]})

        lines = []
        for item in cart.items:
            product = find_product_price(item.product_id)
            lines.append(
                {
                    "product_id": str(item.product_id),
                    "product_type": product.product_type if product else None,
                    "game_id": str(product.game_id) if product and product.game_id else None,
                    "final_price": item.price,
                    "bundle_id": str(item.bundle_id) if item.bundle_id else None,
                }
            )

        order = Order.place(cart_id=str(cart.id), user_id=str(command.user_id), items=lines)
        cart.archive()

        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            cart_id=str(cart.id),
            user_id=str(command.user_id),
            total_amount=order.total_amount,
        )
        return str(order.id)
