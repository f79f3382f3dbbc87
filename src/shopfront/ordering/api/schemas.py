"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Cart ---


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


# --- Orders ---


class ShippingAddressSchema(BaseModel):
    full_name: str = Field(..., max_length=100)
    phone: str | None = Field(None, max_length=20)
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_id": "3f0c2a8e-8a35-4d55-9d2b-0f5d8c1d6e11",
                    "payment_method": "razorpay",
                    "coupon_code": "SAVE10",
                }
            ]
        }
    }

    address_id: str | None = None
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str = Field("COD", max_length=20)
    coupon_code: str | None = Field(None, max_length=50)
    discount: float | None = Field(None, ge=0)
    contact_email: str | None = Field(None, max_length=254)


class OrderIdResponse(BaseModel):
    order_id: str
    order: dict


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., max_length=30)
    reason: str | None = Field(None, max_length=500)


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: str = Field(..., max_length=20)


class RequestReturnRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)


# --- Coupons ---


class ApplyCouponRequest(BaseModel):
    code: str = Field(..., max_length=50)
    subtotal: float | None = Field(None, ge=0)


class CouponQuoteResponse(BaseModel):
    code: str
    subtotal: float
    discount: float


class CreateCouponRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "SAVE10",
                    "discount_type": "percentage",
                    "discount_value": 10,
                    "min_order_amount": 50,
                    "expiry_date": "2030-12-31T23:59:59Z",
                    "usage_limit": 100,
                }
            ]
        }
    }

    code: str = Field(..., max_length=50)
    discount_type: str = Field(..., max_length=20)
    discount_value: float = Field(..., ge=0)
    min_order_amount: float | None = Field(None, ge=0)
    max_discount_amount: float | None = Field(None, ge=0)
    expiry_date: datetime
    is_active: bool | None = None
    usage_limit: int | None = Field(None, ge=1)


class UpdateCouponRequest(BaseModel):
    code: str | None = Field(None, max_length=50)
    discount_type: str | None = Field(None, max_length=20)
    discount_value: float | None = Field(None, ge=0)
    min_order_amount: float | None = Field(None, ge=0)
    max_discount_amount: float | None = Field(None, ge=0)
    expiry_date: datetime | None = None
    is_active: bool | None = None
    usage_limit: int | None = Field(None, ge=1)


class CouponIdResponse(BaseModel):
    coupon_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
