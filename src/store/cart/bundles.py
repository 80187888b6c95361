"""Adding bundles to a cart — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from store.bundle.bundle import Bundle
from store.cart.cart import Cart
from store.domain import store

logger = structlog.get_logger(__name__)


@store.command(part_of="Cart")
class AddBundleToCart:
    cart_id = Identifier(required=True)
    bundle_id = Identifier(required=True)


@store.command_handler(part_of=Cart)
class AddBundleToCartHandler:
    @handle(AddBundleToCart)
    def add_bundle_to_cart(self, command):
        bundle = current_domain.repository_for(Bundle).get(command.bundle_id)
        if not bundle.is_active:
            raise ValidationError({"bundle_id": ["Bundle is not active"]})
        if bundle.is_expired():
            raise ValidationError({"bundle_id": ["Bundle has expired"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.add_bundle(bundle_id=str(bundle.id), shares=bundle.shares())
        repo.add(cart)

        logger.info(
            "Bundle added to cart",
            cart_id=str(cart.id),
            bundle_id=str(bundle.id),
            member_count=len(bundle.products),
            total_amount=cart.total_amount,
        )
