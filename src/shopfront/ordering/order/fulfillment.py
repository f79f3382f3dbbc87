"""Fulfilment status updates — admin moves an order along its lifecycle."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.ordering.order.cancellation import CancellationActor, cancel_order
from shopfront.ordering.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=30)
    reason = String(max_length=500)


@shopfront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        try:
            target = OrderStatus(command.status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status {command.status}"]}) from None

        repo = current_domain.repository_for(Order)
        order = repo.find(command.order_id)

        if target == OrderStatus.CANCELLED:
            cancel_order(order, command.reason, CancellationActor.ADMIN.value)
            return

        observed = order.status
        order.advance(target)

        repo.add(order)
        logger.info("Order status updated", order_id=str(order.id), previous_status=observed, status=order.status)
