"""Inbound cross-domain event handler — Library reacts to Store events.

OrderPaid puts the purchased games and addons into the buyer's library;
OrderRefunded takes back what that order granted.

Cross-domain events are imported from shared.events.store and registered
as external events via library.register_external_event().
"""

import json

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.store import OrderPaid, OrderRefunded

from library.domain import library
from library.ownership.grants import grant_items, revoke_items
from library.ownership.library_game import LibraryGame
from library.wishlist.management import wishlist_of
from library.wishlist.wishlist import WishlistItem

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
library.register_external_event(OrderPaid, "Store.OrderPaid.v1")
library.register_external_event(OrderRefunded, "Store.OrderRefunded.v1")


def _items(event):
    return json.loads(event.items) if isinstance(event.items, str) else list(event.items or [])


def _drop_from_wishlist(user_id, product_ids):
    """Bought products leave the buyer's wishlist."""
    wishlist_repo = current_domain.repository_for(WishlistItem)
    for item in wishlist_of(user_id):
        if str(item.product_id) in product_ids:
            wishlist_repo._dao.delete(item)


@library.event_handler(part_of=LibraryGame, stream_category="store::order")
class StoreOrderEventHandler:
    """Grants and revokes ownership as orders are paid and refunded."""

    @handle(OrderPaid)
    def on_order_paid(self, event: OrderPaid) -> None:
        repo = current_domain.repository_for(LibraryGame)
        entries = grant_items(str(event.user_id), str(event.order_id), _items(event))
        for entry in entries:
            repo.add(entry)
        _drop_from_wishlist(str(event.user_id), [item["product_id"] for item in _items(event)])
        logger.info(
            "Ownership granted",
            order_id=str(event.order_id),
            user_id=str(event.user_id),
            entries=len(entries),
        )

    @handle(OrderRefunded)
    def on_order_refunded(self, event: OrderRefunded) -> None:
        repo = current_domain.repository_for(LibraryGame)
        entries = revoke_items(str(event.user_id), str(event.order_id), _items(event))
        for entry in entries:
            repo.add(entry)
        logger.info(
            "Ownership revoked",
            order_id=str(event.order_id),
            user_id=str(event.user_id),
            entries=len(entries),
        )
