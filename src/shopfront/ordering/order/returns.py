"""Return requests — a customer asks to send back a delivered order."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.errors import ForbiddenError
from shopfront.ordering.order.order import Order


@shopfront.command(part_of="Order")
class RequestReturn:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reason = String(required=True, max_length=500)


@shopfront.command_handler(part_of=Order)
class RequestReturnHandler:
    @handle(RequestReturn)
    def request_return(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find(command.order_id)
        if order.user_id != command.user_id:
            raise ForbiddenError("You can only return your own orders", order_id=command.order_id)

        order.request_return(command.reason)

        repo.add(order)
