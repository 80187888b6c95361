"""Cross-domain event contracts for Store domain events.

These classes define the event shape for consumption by other domains
(the Library domain grants and revokes ownership from them). They are
registered as external events via domain.register_external_event()
with matching __type__ strings so Protean's stream deserialization
works correctly.

The source-of-truth events are in src/store/order/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Float, Identifier, Text


class OrderPaid(BaseEvent):
    """An order was paid in full; its products now belong to the user."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_type, game_id, final_price}
    total_amount = Float(required=True)
    paid_at = DateTime(required=True)


class OrderRefunded(BaseEvent):
    """A paid order was refunded; its products must be taken back."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_type, game_id, final_price}
    refunded_at = DateTime(required=True)
