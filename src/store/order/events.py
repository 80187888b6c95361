"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from store.domain import store


@store.event(part_of="Order")
class OrderPlaced:
    """A cart was turned into an order awaiting payment."""

    __version__ = 1

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_type, game_id, final_price, bundle_id}
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)


@store.event(part_of="Order")
class OrderPaid:
    """The order was paid in full; its products now belong to the user."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_type, game_id, final_price}
    total_amount = Float(required=True)
    paid_at = DateTime(required=True)


@store.event(part_of="Order")
class OrderPaymentFailed:
    """Payment for the order did not go through."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    failed_at = DateTime(required=True)


@store.event(part_of="Order")
class OrderReopened:
    """A failed order is awaiting payment again."""

    __version__ = 1

    order_id = Identifier(required=True)
    reopened_at = DateTime(required=True)


@store.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled before payment."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_at = DateTime(required=True)


@store.event(part_of="Order")
class OrderRefunded:
    """A paid order was refunded; its products must be taken back."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_type, game_id, final_price}
    refunded_at = DateTime(required=True)


@store.event(part_of="Order")
class OrderDeleted:
    """The order was soft deleted."""

    __version__ = 1

    order_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
