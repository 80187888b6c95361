"""Inbound cross-domain event handler — Store reacts to Identity events.

Listens for UserDeactivated and UserReactivated events from the Identity
domain to maintain the DeactivatedUser projection, which blocks checkout.

Cross-domain events are imported from shared.events.identity and registered
as external events via store.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.identity import UserDeactivated, UserReactivated

from store.domain import store
from store.order.order import Order
from store.projections.deactivated_users import DeactivatedUser

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
store.register_external_event(UserDeactivated, "Identity.UserDeactivated.v1")
store.register_external_event(UserReactivated, "Identity.UserReactivated.v1")


@store.event_handler(part_of=Order, stream_category="identity::user")
class IdentityOrderEventHandler:
    """Reacts to Identity domain events to track deactivated users."""

    @handle(UserDeactivated)
    def on_user_deactivated(self, event: UserDeactivated) -> None:
        logger.info("Blocking checkout for deactivated user", user_id=str(event.user_id), reason=event.reason)
        repo = current_domain.repository_for(DeactivatedUser)
        try:
            repo.get(str(event.user_id))
        except ObjectNotFoundError:
            repo.add(
                DeactivatedUser(
                    user_id=str(event.user_id),
                    reason=event.reason,
                    deactivated_at=event.deactivated_at,
                )
            )

    @handle(UserReactivated)
    def on_user_reactivated(self, event: UserReactivated) -> None:
        logger.info("Unblocking checkout for reactivated user", user_id=str(event.user_id))
        repo = current_domain.repository_for(DeactivatedUser)
        try:
            record = repo.get(str(event.user_id))
        except ObjectNotFoundError:
            return
        repo._dao.delete(record)
