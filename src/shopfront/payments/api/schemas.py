"""Pydantic request/response schemas for the Payments API."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class CreatePaymentOrderRequest(BaseModel):
    amount: float = Field(..., gt=0)
    currency: str = Field("INR", max_length=3)
    receipt: str | None = Field(None, max_length=40)


class PaymentOrderResponse(BaseModel):
    id: str
    amount: int
    currency: str
    key: str | None = None


class VerifyPaymentRequest(BaseModel):
    """Checkout callback payload; camelCase and snake_case keys are both accepted."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "orderId": "a1b2c3d4-0000-4000-8000-000000000000",
                    "providerOrderId": "order_Nx1",
                    "providerPaymentId": "pay_Nx1",
                    "signature": "9d2c1e6f0b7a4c3e8f1d2b5a6c7e8f90a1b2c3d4e5f60718293a4b5c6d7e8f90",
                }
            ]
        }
    }

    order_id: str = Field(..., validation_alias=AliasChoices("orderId", "order_id"))
    provider_order_id: str = Field(..., validation_alias=AliasChoices("providerOrderId", "provider_order_id"))
    provider_payment_id: str = Field(..., validation_alias=AliasChoices("providerPaymentId", "provider_payment_id"))
    signature: str


class VerifyPaymentResponse(BaseModel):
    success: bool
    message: str


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str | None = None
