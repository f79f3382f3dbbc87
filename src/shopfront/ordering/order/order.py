"""Order aggregate — an immutable purchase snapshot with a forward-only lifecycle.

Items carry the price paid and the shipping address is copied in at
placement, so later catalog or address-book edits never reach an existing
order.

State machine:
    pending → processing → shipped → out-for-delivery → delivered
    pending | processing → cancelled
    delivered → return-requested

Payment runs on its own axis (pending → paid | failed) and is independent
of the fulfilment status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from shopfront.catalogue.product.repository import StockLine
from shopfront.domain import shopfront
from shopfront.errors import InvalidTransition
from shopfront.ordering.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentConfirmed,
    PaymentFailed,
    ReturnRequested,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"
    RETURN_REQUESTED = "return-requested"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class PaymentMethod(Enum):
    COD = "COD"
    RAZORPAY = "razorpay"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.OUT_FOR_DELIVERY},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.RETURN_REQUESTED},
    OrderStatus.RETURN_REQUESTED: set(),
    OrderStatus.RETURNED: set(),
    OrderStatus.CANCELLED: set(),
}

CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.PROCESSING}


def round2(amount: float) -> float:
    return round(amount, 2)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@shopfront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, copied from the address book or the checkout form."""

    full_name = String(required=True, max_length=100)
    phone = String(max_length=20)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@shopfront.value_object(part_of="Order")
class OrderPricing:
    """Price breakdown locked at placement.

    At most one of ``coupon_discount`` and ``discount`` is non-zero, and
    ``total`` always equals ``round2(subtotal - discount + delivery_charge)``.
    """

    subtotal = Float(required=True, min_value=0.0)
    coupon_code = String(max_length=50)
    coupon_discount = Float(default=0.0, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    delivery_charge = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)

    @invariant.post
    def discounts_are_exclusive(self):
        if self.coupon_discount and self.discount:
            raise ValidationError({"discount": ["A coupon discount and a generic discount cannot both apply"]})

    @invariant.post
    def total_must_match_breakdown(self):
        expected = round2(self.subtotal - self.applied_discount + (self.delivery_charge or 0.0))
        if abs(self.total - expected) > 1e-9:
            raise ValidationError({"total": [f"Total must be {expected:.2f}"]})

    @property
    def applied_discount(self) -> float:
        return (self.coupon_discount or 0.0) or (self.discount or 0.0)


@shopfront.value_object(part_of="Order")
class PaymentResult:
    provider_order_id = String(max_length=100)
    provider_payment_id = String(max_length=100)
    signature = String(max_length=255)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@shopfront.entity(part_of="Order")
class OrderItem:
    """A purchased product with the price charged for it."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    discount = Float(default=0.0)
    final_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return self.final_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@shopfront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    contact_email = String(max_length=254)
    shipping_address = ValueObject(ShippingAddress, required=True)
    pricing = ValueObject(OrderPricing, required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_result = ValueObject(PaymentResult)
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    cancellation_reason = String(max_length=500)
    return_reason = String(max_length=500)
    placed_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, items, shipping_address, pricing, payment_method=None, contact_email=None):
        """Create a pending order from priced line items.

        ``items`` is a list of dicts with product_id, name, quantity,
        unit_price, discount and final_price.
        """
        if not items:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            contact_email=contact_email,
            shipping_address=shipping_address,
            pricing=pricing,
            payment_method=payment_method or PaymentMethod.COD.value,
            placed_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(OrderItem(**item))
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=sum(item["quantity"] for item in items),
                subtotal=pricing.subtotal,
                discount=pricing.applied_discount,
                delivery_charge=pricing.delivery_charge,
                total=pricing.total,
                payment_method=order.payment_method,
                contact_email=contact_email,
                placed_at=now,
            )
        )
        return order

    def stock_lines(self) -> list[StockLine]:
        return [StockLine(product_id=str(item.product_id), quantity=item.quantity) for item in self.items]

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def _assert_can_transition(self, target: OrderStatus) -> None:
        if not self.can_transition_to(target):
            raise InvalidTransition(str(self.id), self.status, target.value)

    def advance(self, target: OrderStatus):
        """Move forward along the fulfilment path (not for cancellations)."""
        if target == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["Use cancellation to cancel an order"]})
        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        if target == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous,
                new_status=self.status,
                changed_at=now,
            )
        )

    def cancel(self, reason=None, cancelled_by=None):
        if OrderStatus(self.status) not in CANCELLABLE_STATES:
            raise InvalidTransition(str(self.id), self.status, OrderStatus.CANCELLED.value)

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                reason=reason,
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )

    def request_return(self, reason):
        self._assert_can_transition(OrderStatus.RETURN_REQUESTED)

        now = datetime.now(UTC)
        self.status = OrderStatus.RETURN_REQUESTED.value
        self.return_reason = reason
        self.updated_at = now

        self.raise_(
            ReturnRequested(
                order_id=str(self.id),
                user_id=str(self.user_id),
                reason=reason,
                requested_at=now,
            )
        )

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED.value

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def confirm_payment(self, provider_order_id=None, provider_payment_id=None, signature=None) -> bool:
        """Record a successful payment. Returns False when the order was already paid."""
        if self.is_paid:
            return False

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.PAID.value
        self.is_paid = True
        self.paid_at = now
        if provider_payment_id:
            self.payment_result = PaymentResult(
                provider_order_id=provider_order_id,
                provider_payment_id=provider_payment_id,
                signature=signature,
            )
        self.updated_at = now

        self.raise_(
            PaymentConfirmed(
                order_id=str(self.id),
                user_id=str(self.user_id),
                provider_payment_id=provider_payment_id,
                amount=self.pricing.total,
                paid_at=now,
            )
        )
        return True

    def fail_payment(self):
        if self.is_paid:
            raise ValidationError({"payment_status": ["A paid order cannot be marked as failed"]})

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.FAILED.value
        self.updated_at = now

        self.raise_(PaymentFailed(order_id=str(self.id), user_id=str(self.user_id), failed_at=now))

    def reset_payment(self):
        self.payment_status = PaymentStatus.PENDING.value
        self.is_paid = False
        self.paid_at = None
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------
    def to_dict(self) -> dict:
        address = self.shipping_address
        pricing = self.pricing
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "status": self.status,
            "payment_method": self.payment_method,
            "payment_status": self.payment_status,
            "is_paid": self.is_paid,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
            "is_delivered": self.is_delivered,
            "delivered_at": self.delivered_at.isoformat() if self.delivered_at else None,
            "items": [
                {
                    "product_id": str(item.product_id),
                    "name": item.name,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "discount": item.discount,
                    "final_price": item.final_price,
                    "line_total": round2(item.line_total),
                }
                for item in self.items
            ],
            "shipping_address": {
                "full_name": address.full_name,
                "phone": address.phone,
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "postal_code": address.postal_code,
                "country": address.country,
            },
            "pricing": {
                "subtotal": pricing.subtotal,
                "coupon_code": pricing.coupon_code,
                "coupon_discount": pricing.coupon_discount,
                "discount": pricing.discount,
                "delivery_charge": pricing.delivery_charge,
                "total": pricing.total,
            },
            "cancellation_reason": self.cancellation_reason,
            "return_reason": self.return_reason,
            "placed_at": self.placed_at.isoformat() if self.placed_at else None,
        }
