"""Order pricing — subtotal, discount, delivery charge and total."""

from dataclasses import dataclass

from protean.exceptions import ValidationError

from shopfront.catalogue.product.product import Product
from shopfront.ordering.coupon.validation import CouponQuote
from shopfront.ordering.order.order import OrderPricing, round2
from shopfront.settings.store import CheckoutConfig


@dataclass(frozen=True)
class PricedLine:
    """A cart line joined with the product it refers to."""

    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.final_price * self.quantity

    def snapshot(self) -> dict:
        return {
            "product_id": str(self.product.id),
            "name": self.product.name,
            "quantity": self.quantity,
            "unit_price": self.product.price,
            "discount": self.product.discount,
            "final_price": self.product.final_price,
        }


def subtotal_of(lines: list[PricedLine]) -> float:
    return sum(line.line_total for line in lines)


def price_order(
    subtotal: float,
    config: CheckoutConfig,
    coupon: CouponQuote | None = None,
    discount: float | None = None,
) -> OrderPricing:
    """Price an order. A coupon, when present, replaces any generic discount."""
    delivery_charge = config.delivery_charge_for(subtotal)

    if coupon is not None:
        return OrderPricing(
            subtotal=subtotal,
            coupon_code=coupon.code,
            coupon_discount=coupon.discount,
            delivery_charge=delivery_charge,
            total=round2(subtotal - coupon.discount + delivery_charge),
        )

    discount = discount or 0.0
    if discount < 0 or discount > subtotal:
        raise ValidationError({"discount": ["Discount must be between 0 and the subtotal"]})

    return OrderPricing(
        subtotal=subtotal,
        discount=discount,
        delivery_charge=delivery_charge,
        total=round2(subtotal - discount + delivery_charge),
    )
