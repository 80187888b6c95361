"""Wishlist management — commands and handler.

A product can be on a user's wishlist once, and never when the user
already owns it.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from library.domain import library
from library.ownership.grants import owned_games, owns_game
from library.wishlist.wishlist import WishlistItem


@library.command(part_of="WishlistItem")
class AddToWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@library.command(part_of="WishlistItem")
class RemoveFromWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


def wishlist_of(user_id):
    items = current_domain.repository_for(WishlistItem)._dao.query.filter(user_id=str(user_id)).limit(None).all().items
    return sorted(items, key=lambda i: i.added_at)


def _wishlist_entry(user_id, product_id):
    return next((i for i in wishlist_of(user_id) if str(i.product_id) == str(product_id)), None)


def _already_owned(user_id, product_id):
    if owns_game(user_id, product_id):
        return True
    return any(str(product_id) in entry.owned_addon_ids for entry in owned_games(user_id))


@library.command_handler(part_of=WishlistItem)
class ManageWishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        if _wishlist_entry(command.user_id, command.product_id) is not None:
            raise ValidationError({"product_id": ["Product is already on the wishlist"]})
        if _already_owned(command.user_id, command.product_id):
            raise ValidationError({"product_id": ["Product is already in the library"]})

        item = WishlistItem.add(command.user_id, command.product_id)
        current_domain.repository_for(WishlistItem).add(item)
        return str(item.id)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        item = _wishlist_entry(command.user_id, command.product_id)
        if item is None:
            raise ObjectNotFoundError(f"Product {command.product_id} is not on the wishlist")
        current_domain.repository_for(WishlistItem)._dao.delete(item)
