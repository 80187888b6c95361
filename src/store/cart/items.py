"""Cart item management — commands and handler.

Prices are never taken from the caller: a product goes into the cart at its
current discounted price from the Store's price list.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from store.cart.cart import Cart
from store.domain import store
from store.pricing.lookup import discounted_price, find_product_price, is_purchasable

logger = structlog.get_logger(__name__)


@store.command(part_of="Cart")
class AddCartItem:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.command(part_of="Cart")
class RemoveCartItem:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@store.command(part_of="Cart")
class RecalculateCartTotal:
    cart_id = Identifier(required=True)


@store.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItem)
    def add_cart_item(self, command):
        product = find_product_price(command.product_id)
        if not is_purchasable(product):
            raise ValidationError({"product_id": ["Product is not available for purchase"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        item_id = cart.add_item(product_id=command.product_id, price=discounted_price(product))
        repo.add(cart)

        logger.info(
            "Product added to cart",
            cart_id=str(cart.id),
            product_id=str(command.product_id),
            total_amount=cart.total_amount,
        )
        return item_id

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        removed = cart.remove_item(item_id=command.item_id)
        repo.add(cart)
        return removed

    @handle(RecalculateCartTotal)
    def recalculate_cart_total(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.recalculate_total()
        repo.add(cart)
        return cart.total_amount
