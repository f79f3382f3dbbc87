"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing (the default)
- RazorpayGateway when PAYMENT_GATEWAY=razorpay, keyed from store settings
"""

import os

from shopfront.payments.gateway.fake_adapter import FakeGateway
from shopfront.payments.gateway.port import GatewayError, PaymentGateway, ProviderOrder

_current_gateway: PaymentGateway | None = None


def _build_gateway() -> PaymentGateway:
    if os.getenv("PAYMENT_GATEWAY", "fake").lower() == "razorpay":
        from shopfront.payments.gateway.razorpay_adapter import RazorpayGateway
        from shopfront.settings.store import load_gateway_credentials

        credentials = load_gateway_credentials()
        if not (credentials.key_id and credentials.key_secret):
            raise GatewayError("Razorpay credentials are not configured")
        return RazorpayGateway(credentials.key_id, credentials.key_secret)
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None


__all__ = ["GatewayError", "PaymentGateway", "ProviderOrder", "get_gateway", "reset_gateway", "set_gateway"]
