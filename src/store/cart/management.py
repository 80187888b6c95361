"""Cart management — commands and handler.

A user has at most one active cart. Older carts are either archived (they
became an order) or abandoned (left idle), and an abandoned cart can be
brought back as long as no other cart is active.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from shared.clock import naive_utc
from store.cart.cart import Cart, CartItem, CartStatus
from store.domain import store

logger = structlog.get_logger(__name__)


@store.command(part_of="Cart")
class GetOrCreateActiveCart:
    """Return the user's active cart, creating one when there is none."""

    user_id = Identifier(required=True)


@store.command(part_of="Cart")
class ArchiveCart:
    cart_id = Identifier(required=True)


@store.command(part_of="Cart")
class DeleteCart:
    cart_id = Identifier(required=True)


@store.command(part_of="Cart")
class RecoverAbandonedCart:
    """Reactivate the user's most recently touched abandoned cart."""

    user_id = Identifier(required=True)


def carts_of_user(user_id, status: CartStatus | None = None) -> list[Cart]:
    filters = {"user_id": str(user_id)}
    if status is not None:
        filters["status"] = status.value
    return current_domain.repository_for(Cart)._dao.query.filter(**filters).limit(None).all().items


def active_cart_of_user(user_id) -> Cart | None:
    carts = carts_of_user(user_id, CartStatus.ACTIVE)
    return carts[0] if carts else None


@store.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(GetOrCreateActiveCart)
    def get_or_create_active_cart(self, command):
        existing = active_cart_of_user(command.user_id)
        if existing is not None:
            return str(existing.id)

        cart = Cart.create(user_id=command.user_id)
        current_domain.repository_for(Cart).add(cart)
        logger.info("Cart created", cart_id=str(cart.id), user_id=str(command.user_id))
        return str(cart.id)

    @handle(ArchiveCart)
    def archive_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.archive()
        repo.add(cart)

    @handle(DeleteCart)
    def delete_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)

        item_dao = current_domain.repository_for(CartItem)._dao
        for item in cart.items:
            item_dao.delete(item)
        repo._dao.delete(cart)
        logger.info("Cart deleted", cart_id=str(command.cart_id), user_id=str(cart.user_id))

    @handle(RecoverAbandonedCart)
    def recover_abandoned_cart(self, command):
        if active_cart_of_user(command.user_id) is not None:
            raise ValidationError({"user_id": ["Cannot recover an abandoned cart while another cart is active"]})

        abandoned = carts_of_user(command.user_id, CartStatus.ABANDONED)
        if not abandoned:
            return None

        latest = max(abandoned, key=lambda c: naive_utc(c.last_modified_at or c.created_at))
        repo = current_domain.repository_for(Cart)
        cart = repo.get(str(latest.id))
        cart.recover()
        repo.add(cart)

        logger.info("Abandoned cart recovered", cart_id=str(cart.id), user_id=str(command.user_id))
        return str(cart.id)
