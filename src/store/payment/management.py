"""Payment administration — manual status correction and soft deletion."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from store.domain import store
from store.payment.payment import Payment, PaymentStatus

logger = structlog.get_logger(__name__)


@store.command(part_of="Payment")
class UpdatePaymentStatus:
    payment_id = Identifier(required=True)
    status = String(required=True, choices=PaymentStatus)


@store.command(part_of="Payment")
class DeletePayment:
    payment_id = Identifier(required=True)


@store.command_handler(part_of=Payment)
class ManagePaymentHandler:
    @handle(UpdatePaymentStatus)
    def update_payment_status(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)
        payment.change_status(command.status)
        repo.add(payment)
        logger.info("Payment status changed", payment_id=str(payment.id), status=payment.status)

    @handle(DeletePayment)
    def delete_payment(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)
        payment.delete()
        repo.add(payment)
        logger.info("Payment deleted", payment_id=str(payment.id))
