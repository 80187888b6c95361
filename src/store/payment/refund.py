"""Payment refunds — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from store.domain import store
from store.gateway import get_gateway
from store.order.order import Order
from store.payment.payment import Payment, PaymentStatus

logger = structlog.get_logger(__name__)


@store.command(part_of="Payment")
class RefundPayment:
    payment_id = Identifier(required=True)
    reason = String(max_length=500, default="Requested by customer")


@store.command_handler(part_of=Payment)
class RefundPaymentHandler:
    @handle(RefundPayment)
    def refund_payment(self, command):
        payment_repo = current_domain.repository_for(Payment)
        payment = payment_repo.get(command.payment_id)
        if PaymentStatus(payment.status) != PaymentStatus.COMPLETED:
            raise ValidationError({"payment_id": ["Only completed payments can be refunded"]})

        result = get_gateway().create_refund(
            transaction_id=payment.external_payment_id,
            amount=payment.amount,
            reason=command.reason or "Requested by customer",
        )
        if not result.success:
            logger.warning("Refund declined by gateway", payment_id=str(payment.id), reason=result.failure_reason)
            raise ValidationError({"payment_id": [f"Refund failed: {result.failure_reason}"]})

        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(str(payment.order_id))

        payment.record_refund(refund_id=result.refund_id)
        order.refund()

        payment_repo.add(payment)
        order_repo.add(order)

        logger.info(
            "Payment refunded",
            payment_id=str(payment.id),
            order_id=str(order.id),
            amount=payment.amount,
        )
        return result.refund_id
