"""Razorpay gateway adapter — talks to the Orders REST API."""

import requests
import structlog

from shopfront.payments.gateway.port import GatewayError, PaymentGateway, ProviderOrder

logger = structlog.get_logger(__name__)

RAZORPAY_API = "https://api.razorpay.com/v1"


class RazorpayGateway(PaymentGateway):
    def __init__(self, key_id: str, key_secret: str, timeout: float = 10.0) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.timeout = timeout

    def create_order(self, amount: int, currency: str, receipt: str | None = None) -> ProviderOrder:
        payload = {"amount": amount, "currency": currency}
        if receipt:
            payload["receipt"] = receipt

        try:
            response = requests.post(
                f"{RAZORPAY_API}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Razorpay order creation failed", amount=amount, currency=currency, error=str(exc))
            raise GatewayError("Could not create payment order") from exc

        body = response.json()
        return ProviderOrder(
            id=body["id"],
            amount=body["amount"],
            currency=body["currency"],
            receipt=body.get("receipt"),
            status=body.get("status", "created"),
        )
