"""Payment aggregate (CQRS) — one charge attempt against an order.

A payment is created for every attempt, so a failed attempt followed by a
successful retry leaves two payments on the same order.

State Machine:
    PENDING → COMPLETED | FAILED
    COMPLETED → REFUNDED
    FAILED, REFUNDED → (terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from store.domain import store
from store.payment.events import (
    PaymentCompleted,
    PaymentDeleted,
    PaymentFailed,
    PaymentRefunded,
    PaymentStatusChanged,
)


class PaymentStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class PaymentMethod(Enum):
    CARD = "Card"
    PAYPAL = "PayPal"
    WALLET = "Wallet"


_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.COMPLETED, PaymentStatus.FAILED},
    PaymentStatus.COMPLETED: {PaymentStatus.REFUNDED},
    PaymentStatus.FAILED: set(),
    PaymentStatus.REFUNDED: set(),
}


@store.aggregate
class Payment:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    external_payment_id = String(max_length=255)  # Gateway transaction id
    provider_name = String(max_length=50)
    provider_response = Text()
    failure_reason = String(max_length=500)
    refund_id = String(max_length=255)
    payment_date = DateTime()
    refunded_at = DateTime()
    is_deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def initiate(cls, order_id, user_id, payment_method, amount, currency="USD"):
        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            user_id=user_id,
            payment_method=payment_method,
            amount=amount,
            currency=currency,
            status=PaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    def _transition(self, target):
        current = PaymentStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})
        self.status = target.value
        self.updated_at = datetime.now(UTC)
        return current

    # -------------------------------------------------------------------
    # Gateway outcomes
    # -------------------------------------------------------------------
    def record_success(self, transaction_id, provider_name, provider_response=None):
        self._transition(PaymentStatus.COMPLETED)
        self.external_payment_id = transaction_id
        self.provider_name = provider_name
        self.provider_response = provider_response
        self.payment_date = self.updated_at

        self.raise_(
            PaymentCompleted(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount,
                external_payment_id=transaction_id,
                provider_name=provider_name,
                payment_date=self.payment_date,
            )
        )

    def record_failure(self, reason, provider_name, provider_response=None):
        self._transition(PaymentStatus.FAILED)
        self.failure_reason = reason
        self.provider_name = provider_name
        self.provider_response = provider_response

        self.raise_(
            PaymentFailed(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount,
                provider_name=provider_name,
                failure_reason=reason,
                failed_at=self.updated_at,
            )
        )

    def record_refund(self, refund_id=None):
        self._transition(PaymentStatus.REFUNDED)
        self.refund_id = refund_id
        self.refunded_at = self.updated_at

        self.raise_(
            PaymentRefunded(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount,
                refund_id=refund_id,
                refunded_at=self.refunded_at,
            )
        )

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def change_status(self, target):
        """Manual correction of the payment status, bound by the state machine."""
        previous = self._transition(PaymentStatus(target))
        self.raise_(
            PaymentStatusChanged(
                payment_id=str(self.id),
                previous_status=previous.value,
                new_status=self.status,
                changed_at=self.updated_at,
            )
        )

    def delete(self):
        if self.is_deleted:
            raise ValidationError({"payment": ["Payment has already been deleted"]})
        if PaymentStatus(self.status) == PaymentStatus.COMPLETED:
            raise ValidationError({"status": ["Completed payments cannot be deleted; refund them instead"]})

        now = datetime.now(UTC)
        self.is_deleted = True
        self.updated_at = now

        self.raise_(PaymentDeleted(payment_id=str(self.id), deleted_at=now))
