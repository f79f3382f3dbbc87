"""Fake payment gateway for development and testing.

Opens provider orders in memory and records every call, so tests can
assert on what checkout asked for without reaching the provider.
"""

from uuid import uuid4

from shopfront.payments.gateway.port import GatewayError, PaymentGateway, ProviderOrder


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    key_id = "rzp_test_fake"

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_order(self, amount: int, currency: str, receipt: str | None = None) -> ProviderOrder:
        self.calls.append({"method": "create_order", "amount": amount, "currency": currency, "receipt": receipt})

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        return ProviderOrder(id=f"order_fake_{uuid4().hex[:14]}", amount=amount, currency=currency, receipt=receipt)
