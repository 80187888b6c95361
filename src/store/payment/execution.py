"""Payment execution — charges an order through the payment gateway.

Both outcomes are recorded: a successful charge completes the payment and
marks the order Paid, a declined charge fails both. The handler returns the
gateway transaction id, or None when the charge was declined.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from store.domain import store
from store.gateway import get_gateway
from store.order.order import Order, OrderStatus
from store.payment.payment import Payment, PaymentMethod

logger = structlog.get_logger(__name__)


@store.command(part_of="Payment")
class ExecutePayment:
    order_id = Identifier(required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    currency = String(max_length=3, default="USD")


@store.command_handler(part_of=Payment)
class ExecutePaymentHandler:
    @handle(ExecutePayment)
    def execute_payment(self, command):
        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(command.order_id)
        if order.is_deleted:
            raise ValidationError({"order_id": ["Order has been deleted"]})
        if OrderStatus(order.status) != OrderStatus.PENDING:
            raise ValidationError({"order_id": [f"Cannot pay for an order in {order.status} status"]})

        payment = Payment.initiate(
            order_id=str(order.id),
            user_id=str(order.user_id),
            payment_method=command.payment_method,
            amount=order.total_amount,
            currency=command.currency or "USD",
        )

        gateway = get_gateway()
        result = gateway.create_charge(
            amount=payment.amount,
            currency=payment.currency,
            payment_method=payment.payment_method,
            idempotency_key=str(payment.id),
        )

        if result.success:
            payment.record_success(
                transaction_id=result.transaction_id,
                provider_name=gateway.name,
                provider_response=result.gateway_response,
            )
            order.mark_paid()
            logger.info(
                "Payment completed",
                payment_id=str(payment.id),
                order_id=str(order.id),
                amount=payment.amount,
                transaction_id=result.transaction_id,
            )
        else:
            payment.record_failure(
                reason=result.failure_reason,
                provider_name=gateway.name,
                provider_response=result.gateway_response,
            )
            order.mark_failed()
            logger.warning(
                "Payment declined",
                payment_id=str(payment.id),
                order_id=str(order.id),
                amount=payment.amount,
                reason=result.failure_reason,
            )

        current_domain.repository_for(Payment).add(payment)
        order_repo.add(order)

        return result.transaction_id if result.success else None
