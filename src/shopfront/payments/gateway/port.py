"""Payment gateway port (abstract interface).

Checkout asks the gateway to open a provider-side order for the amount to
collect; the customer pays against it in the provider's widget and the
provider's signed confirmation comes back through payment reconciliation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shopfront.errors import ShopfrontError


class GatewayError(ShopfrontError):
    status_code = 502
    code = "gateway_error"


@dataclass(frozen=True)
class ProviderOrder:
    """An order opened at the payment provider."""

    id: str
    amount: int  # minor units (paise)
    currency: str
    receipt: str | None = None
    status: str = "created"


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    key_id: str | None = None

    @abstractmethod
    def create_order(self, amount: int, currency: str, receipt: str | None = None) -> ProviderOrder:
        """Open a provider order for ``amount`` minor units of ``currency``."""
        ...
