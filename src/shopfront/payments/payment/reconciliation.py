"""Payment reconciliation — applies the provider's signed payment confirmation.

The provider signs ``provider_order_id|provider_payment_id`` with the shared
key secret. A matching signature marks the order paid; anything else leaves
the order untouched. Confirmations may be delivered more than once and at
any time after placement: applying one to an order that is already paid
changes nothing.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.errors import SignatureMismatch
from shopfront.ordering.order.order import Order
from shopfront.payments.gateway import GatewayError
from shopfront.payments.payment.signature import signature_matches
from shopfront.settings.store import load_gateway_credentials

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Order")
class VerifyPayment:
    order_id = Identifier(required=True)
    provider_order_id = String(required=True, max_length=100)
    provider_payment_id = String(required=True, max_length=100)
    signature = String(required=True, max_length=255)


@shopfront.command_handler(part_of=Order)
class PaymentReconciliationHandler:
    @handle(VerifyPayment)
    def verify_payment(self, command):
        """Returns True when the order became paid, False when it already was."""
        secret = load_gateway_credentials().key_secret
        if not secret:
            raise GatewayError("Payment key secret is not configured")

        if not signature_matches(secret, command.provider_order_id, command.provider_payment_id, command.signature):
            logger.warning(
                "Payment signature mismatch",
                order_id=command.order_id,
                provider_order_id=command.provider_order_id,
            )
            raise SignatureMismatch(command.order_id)

        repo = current_domain.repository_for(Order)
        order = repo.find(command.order_id)

        if not order.confirm_payment(
            provider_order_id=command.provider_order_id,
            provider_payment_id=command.provider_payment_id,
            signature=command.signature,
        ):
            logger.info("Payment already recorded", order_id=command.order_id)
            return False

        repo.add(order)
        if order.is_cancelled:
            logger.warning("Payment received for a cancelled order", order_id=command.order_id)
        logger.info("Payment verified", order_id=command.order_id, provider_payment_id=command.provider_payment_id)
        return True
