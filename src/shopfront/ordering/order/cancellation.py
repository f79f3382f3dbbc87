"""Order cancellation — command, handler and the shared cancel routine.

The order save is conditional on the version that was loaded. A concurrent
writer that loses re-runs its handler and finds the order already cancelled,
so cancelling twice, or racing a cancellation against a fulfilment update,
never credits stock more than once.
"""

from enum import Enum

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront
from shopfront.errors import ForbiddenError
from shopfront.ordering.order.order import Order

logger = structlog.get_logger(__name__)


class CancellationActor(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@shopfront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cancelled_by = String(max_length=20, default=CancellationActor.CUSTOMER.value)
    reason = String(max_length=500)


def cancel_order(order: Order, reason: str | None, cancelled_by: str) -> bool:
    """Cancel ``order`` and return its stock.

    Returns False when the order was already cancelled. Raises
    ``InvalidTransition`` for any status that cannot be cancelled.
    """
    repo = current_domain.repository_for(Order)

    if order.is_cancelled:
        logger.info("Order already cancelled", order_id=str(order.id))
        return False

    observed = order.status
    order.cancel(reason=reason, cancelled_by=cancelled_by)
    current_domain.repository_for(Product).release(order.stock_lines())
    repo.add(order)

    logger.info("Order cancelled", order_id=str(order.id), cancelled_by=cancelled_by, previous_status=observed)
    return True


@shopfront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel(self, command):
        order = current_domain.repository_for(Order).find(command.order_id)

        if command.cancelled_by != CancellationActor.ADMIN.value and order.user_id != command.user_id:
            raise ForbiddenError("You can only cancel your own orders", order_id=command.order_id)

        return cancel_order(order, command.reason, command.cancelled_by)
