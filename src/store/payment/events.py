"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from store.domain import store


@store.event(part_of="Payment")
class PaymentCompleted:
    """The gateway accepted the charge."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    external_payment_id = String(required=True)
    provider_name = String(required=True)
    payment_date = DateTime(required=True)


@store.event(part_of="Payment")
class PaymentFailed:
    """The gateway declined the charge."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    provider_name = String(required=True)
    failure_reason = String()
    failed_at = DateTime(required=True)


@store.event(part_of="Payment")
class PaymentRefunded:
    """A completed payment was paid back to the user."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    refund_id = String()
    refunded_at = DateTime(required=True)


@store.event(part_of="Payment")
class PaymentStatusChanged:
    """An administrator corrected the status of a payment."""

    __version__ = 1

    payment_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@store.event(part_of="Payment")
class PaymentDeleted:
    """The payment record was soft deleted."""

    __version__ = 1

    payment_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
