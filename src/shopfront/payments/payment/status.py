"""Manual payment status updates — admins settle COD and offline payments."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.ordering.order.order import Order, PaymentStatus


@shopfront.command(part_of="Order")
class UpdatePaymentStatus:
    order_id = Identifier(required=True)
    payment_status = String(required=True, max_length=20)


@shopfront.command_handler(part_of=Order)
class UpdatePaymentStatusHandler:
    @handle(UpdatePaymentStatus)
    def update_payment_status(self, command):
        try:
            target = PaymentStatus(command.payment_status)
        except ValueError:
            raise ValidationError({"payment_status": [f"Unknown payment status {command.payment_status}"]}) from None

        repo = current_domain.repository_for(Order)
        order = repo.find(command.order_id)

        if target == PaymentStatus.PAID:
            order.confirm_payment()
        elif target == PaymentStatus.FAILED:
            order.fail_payment()
        else:
            order.reset_payment()

        repo.add(order)
