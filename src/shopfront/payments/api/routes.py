"""FastAPI routes for the Payments context."""

import os

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from shopfront.api.auth import Principal, current_principal, require_admin
from shopfront.payments.api.schemas import (
    ConfigureGatewayRequest,
    CreatePaymentOrderRequest,
    PaymentOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from shopfront.payments.gateway import get_gateway
from shopfront.payments.gateway.fake_adapter import FakeGateway
from shopfront.payments.payment.initiation import open_provider_order
from shopfront.payments.payment.reconciliation import VerifyPayment

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/create-order", response_model=PaymentOrderResponse)
async def create_payment_order(
    body: CreatePaymentOrderRequest, principal: Principal = Depends(current_principal)
) -> PaymentOrderResponse:
    """Open a provider order the checkout widget can collect payment against."""
    provider_order = open_provider_order(body.amount, body.currency, receipt=body.receipt)
    return PaymentOrderResponse(
        id=provider_order.id,
        amount=provider_order.amount,
        currency=provider_order.currency,
        key=get_gateway().key_id,
    )


@payment_router.post("/verify-payment", response_model=VerifyPaymentResponse)
async def verify_payment(
    body: VerifyPaymentRequest, principal: Principal = Depends(current_principal)
) -> VerifyPaymentResponse:
    command = VerifyPayment(
        order_id=body.order_id,
        provider_order_id=body.provider_order_id,
        provider_payment_id=body.provider_payment_id,
        signature=body.signature,
    )
    newly_paid = current_domain.process(command, asynchronous=False)
    message = "Payment verified successfully" if newly_paid else "Payment already verified"
    return VerifyPaymentResponse(success=True, message=message)


@payment_router.post("/gateway/configure")
async def configure_gateway(body: ConfigureGatewayRequest, principal: Principal = Depends(require_admin)) -> dict:
    """Toggle FakeGateway behaviour for manual testing (non-production only)."""
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(should_succeed=body.should_succeed, failure_reason=body.failure_reason or "Gateway unavailable")
    return {"gateway": type(gateway).__name__, "should_succeed": gateway.should_succeed}
