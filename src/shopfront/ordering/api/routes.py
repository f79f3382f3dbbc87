"""FastAPI routes for the Ordering context — cart, orders and coupons."""

import json

import structlog
from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from shopfront.api.auth import Principal, current_principal, require_admin
from shopfront.catalogue.product.product import Product
from shopfront.errors import ForbiddenError, ProductNotFound
from shopfront.ordering.api.schemas import (
    AddToCartRequest,
    ApplyCouponRequest,
    CancelOrderRequest,
    CouponIdResponse,
    CouponQuoteResponse,
    CreateCouponRequest,
    OrderIdResponse,
    PlaceOrderRequest,
    RequestReturnRequest,
    StatusResponse,
    UpdateCartItemRequest,
    UpdateCouponRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
)
from shopfront.ordering.cart.cart import Cart
from shopfront.ordering.cart.items import AddToCart, ClearCart, RemoveCartItem, UpdateCartItem
from shopfront.ordering.checkout.placement import PlaceOrder
from shopfront.ordering.checkout.pricing import PricedLine, subtotal_of
from shopfront.ordering.coupon.coupon import Coupon
from shopfront.ordering.coupon.management import CreateCoupon, DeleteCoupon, ReviseCoupon, load_coupon
from shopfront.ordering.coupon.validation import CouponValidator
from shopfront.ordering.order.cancellation import CancellationActor, CancelOrder
from shopfront.ordering.order.fulfillment import UpdateOrderStatus
from shopfront.ordering.order.order import Order, round2
from shopfront.ordering.order.returns import RequestReturn
from shopfront.payments.payment.status import UpdatePaymentStatus

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _priced_cart(user_id: str) -> list[PricedLine]:
    cart = current_domain.repository_for(Cart).for_user(user_id)
    if cart is None:
        return []

    products = current_domain.repository_for(Product)
    lines = []
    for item in cart.items:
        try:
            lines.append(PricedLine(products.find(item.product_id), item.quantity))
        except ProductNotFound:
            logger.warning("Cart refers to a removed product", user_id=user_id, product_id=str(item.product_id))
    return lines


def _cart_view(user_id: str) -> dict:
    lines = _priced_cart(user_id)
    return {
        "user_id": user_id,
        "items": [
            {
                "product_id": str(line.product.id),
                "name": line.product.name,
                "quantity": line.quantity,
                "final_price": line.product.final_price,
                "stock": line.product.stock,
                "line_total": round2(line.line_total),
            }
            for line in lines
        ],
        "subtotal": round2(subtotal_of(lines)),
    }


@cart_router.get("")
async def get_cart(principal: Principal = Depends(current_principal)) -> dict:
    return _cart_view(principal.user_id)


@cart_router.post("/items", status_code=201)
async def add_to_cart(body: AddToCartRequest, principal: Principal = Depends(current_principal)) -> dict:
    command = AddToCart(user_id=principal.user_id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_view(principal.user_id)


@cart_router.put("/items/{product_id}")
async def update_cart_item(
    product_id: str, body: UpdateCartItemRequest, principal: Principal = Depends(current_principal)
) -> dict:
    command = UpdateCartItem(user_id=principal.user_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_view(principal.user_id)


@cart_router.delete("/items/{product_id}")
async def remove_cart_item(product_id: str, principal: Principal = Depends(current_principal)) -> dict:
    current_domain.process(RemoveCartItem(user_id=principal.user_id, product_id=product_id), asynchronous=False)
    return _cart_view(principal.user_id)


@cart_router.delete("")
async def clear_cart(principal: Principal = Depends(current_principal)) -> dict:
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
    return _cart_view(principal.user_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _visible_order(order_id: str, principal: Principal) -> Order:
    order = current_domain.repository_for(Order).find(order_id)
    if not principal.is_admin and str(order.user_id) != principal.user_id:
        raise ForbiddenError("Not authorized to view this order", order_id=order_id)
    return order


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(current_principal)) -> OrderIdResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        address_id=body.address_id,
        shipping_address=json.dumps(body.shipping_address.model_dump()) if body.shipping_address else None,
        payment_method=body.payment_method,
        coupon_code=body.coupon_code,
        discount=body.discount,
        contact_email=body.contact_email or principal.email,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).find(order_id)
    return OrderIdResponse(order_id=order_id, order=order.to_dict())


@order_router.get("")
async def my_orders(principal: Principal = Depends(current_principal)) -> list[dict]:
    return [order.to_dict() for order in current_domain.repository_for(Order).for_user(principal.user_id)]


@order_router.get("/all")
async def all_orders(status: str | None = None, principal: Principal = Depends(require_admin)) -> list[dict]:
    return [order.to_dict() for order in current_domain.repository_for(Order).everything(status=status)]


@order_router.get("/{order_id}")
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> dict:
    return _visible_order(order_id, principal).to_dict()


@order_router.put("/{order_id}/cancel")
async def cancel_order(
    order_id: str, body: CancelOrderRequest | None = None, principal: Principal = Depends(current_principal)
) -> dict:
    actor = CancellationActor.ADMIN if principal.is_admin else CancellationActor.CUSTOMER
    command = CancelOrder(
        order_id=order_id,
        user_id=principal.user_id,
        cancelled_by=actor.value,
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Order).find(order_id).to_dict()


@order_router.put("/{order_id}/status")
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, principal: Principal = Depends(require_admin)
) -> dict:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Order).find(order_id).to_dict()


@order_router.put("/{order_id}/payment-status")
async def update_payment_status(
    order_id: str, body: UpdatePaymentStatusRequest, principal: Principal = Depends(require_admin)
) -> dict:
    command = UpdatePaymentStatus(order_id=order_id, payment_status=body.payment_status)
    current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Order).find(order_id).to_dict()


@order_router.put("/{order_id}/return")
async def request_return(
    order_id: str, body: RequestReturnRequest, principal: Principal = Depends(current_principal)
) -> dict:
    command = RequestReturn(order_id=order_id, user_id=principal.user_id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Order).find(order_id).to_dict()


# ---------------------------------------------------------------------------
# Coupon Router
# ---------------------------------------------------------------------------
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])


@coupon_router.post("/apply", response_model=CouponQuoteResponse)
async def apply_coupon(body: ApplyCouponRequest, principal: Principal = Depends(current_principal)) -> CouponQuoteResponse:
    """Preview what a coupon takes off; nothing is redeemed until the order is placed."""
    subtotal = body.subtotal if body.subtotal is not None else subtotal_of(_priced_cart(principal.user_id))
    quote = CouponValidator().quote(body.code, subtotal)
    return CouponQuoteResponse(code=quote.code, subtotal=round2(subtotal), discount=round2(quote.discount))


@coupon_router.get("")
async def list_coupons(principal: Principal = Depends(require_admin)) -> list[dict]:
    coupons = current_domain.repository_for(Coupon)._dao.query.order_by("-created_at").all().items
    return [coupon.to_dict() for coupon in coupons]


@coupon_router.get("/{coupon_id}")
async def get_coupon(coupon_id: str, principal: Principal = Depends(require_admin)) -> dict:
    return load_coupon(coupon_id).to_dict()


@coupon_router.post("", status_code=201, response_model=CouponIdResponse)
async def create_coupon(body: CreateCouponRequest, principal: Principal = Depends(require_admin)) -> CouponIdResponse:
    result = current_domain.process(CreateCoupon(**body.model_dump()), asynchronous=False)
    return CouponIdResponse(coupon_id=result)


@coupon_router.put("/{coupon_id}", response_model=StatusResponse)
async def update_coupon(
    coupon_id: str, body: UpdateCouponRequest, principal: Principal = Depends(require_admin)
) -> StatusResponse:
    current_domain.process(ReviseCoupon(coupon_id=coupon_id, **body.model_dump()), asynchronous=False)
    return StatusResponse()


@coupon_router.delete("/{coupon_id}", response_model=StatusResponse)
async def delete_coupon(coupon_id: str, principal: Principal = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteCoupon(coupon_id=coupon_id), asynchronous=False)
    return StatusResponse(status="deleted")
