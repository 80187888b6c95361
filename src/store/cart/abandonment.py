"""Cart abandonment detection — command and handler for flagging idle carts.

Meant to be triggered periodically by an external scheduler through the
maintenance API endpoint. Every active cart whose last modification is
older than the inactivity window becomes Abandoned.
"""

from datetime import UTC, datetime, timedelta

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer
from protean.utils.globals import current_domain

from shared.clock import naive_utc
from store.cart.cart import Cart, CartStatus
from store.domain import store

logger = structlog.get_logger(__name__)

DEFAULT_INACTIVITY_MINUTES = 60 * 24 * 7


@store.command(part_of="Cart")
class DetectAbandonedCarts:
    """Flag active carts idle for longer than ``inactivity_minutes``."""

    inactivity_minutes = Integer(default=DEFAULT_INACTIVITY_MINUTES)
    as_of = DateTime()  # Optional: defaults to now


@store.command_handler(part_of=Cart)
class DetectAbandonedCartsHandler:
    @handle(DetectAbandonedCarts)
    def detect_abandoned_carts(self, command):
        minutes = command.inactivity_minutes
        if minutes is None:
            minutes = DEFAULT_INACTIVITY_MINUTES
        if minutes < 0:
            raise ValidationError({"inactivity_minutes": ["Inactivity period cannot be negative"]})

        as_of = command.as_of or datetime.now(UTC)
        cutoff = naive_utc(as_of - timedelta(minutes=minutes))

        logger.info("Checking for abandoned carts", cutoff=cutoff.isoformat(), inactivity_minutes=minutes)

        repo = current_domain.repository_for(Cart)
        active_carts = repo._dao.query.filter(status=CartStatus.ACTIVE.value).limit(None).all().items
        idle = [c for c in active_carts if c.last_modified_at and naive_utc(c.last_modified_at) < cutoff]

        if not idle:
            logger.info("No abandoned carts found")
            return 0

        for cart in idle:
            cart.abandon()
            repo.add(cart)
            logger.info(
                "Marked cart as abandoned",
                cart_id=str(cart.id),
                user_id=str(cart.user_id),
                item_count=len(cart.items),
            )

        logger.info("Cart abandonment detection complete", abandoned_count=len(idle))
        return len(idle)
