"""Order administration — status changes and soft deletion."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from store.domain import store
from store.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


@store.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@store.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@store.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.change_status(command.status)
        repo.add(order)
        logger.info("Order status changed", order_id=str(order.id), previous=previous, status=order.status)

    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.delete()
        repo.add(order)
        logger.info("Order deleted", order_id=str(order.id))
