"""Payment initiation — opens a provider order for the customer to pay against."""

import structlog
from protean.exceptions import ValidationError

from shopfront.payments.gateway import ProviderOrder, get_gateway

logger = structlog.get_logger(__name__)

DEFAULT_CURRENCY = "INR"


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def open_provider_order(amount: float, currency: str | None = None, receipt: str | None = None) -> ProviderOrder:
    """Ask the gateway for a provider order worth ``amount`` major units."""
    if amount is None or amount <= 0:
        raise ValidationError({"amount": ["Amount must be greater than zero"]})

    currency = (currency or DEFAULT_CURRENCY).upper()
    provider_order = get_gateway().create_order(to_minor_units(amount), currency, receipt=receipt)
    logger.info("Provider order opened", provider_order_id=provider_order.id, amount=provider_order.amount)
    return provider_order
