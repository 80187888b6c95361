"""Deactivated users projection — tracks users blocked from checkout.

Populated by the Identity → Store cross-domain event handler when
UserDeactivated/UserReactivated events are received. The PlaceOrder
handler queries this projection before accepting an order.
"""

from protean.fields import DateTime, Identifier, String

from store.domain import store


@store.projection
class DeactivatedUser:
    user_id = Identifier(identifier=True, required=True)
    reason = String()
    deactivated_at = DateTime()
