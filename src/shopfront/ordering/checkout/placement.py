"""Order placement — turns a user's cart into a pending order.

Flow:
    1. Load the cart (EmptyCart when there is nothing in it)
    2. Resolve the shipping input into an address snapshot
    3. Price the lines at the products' current final prices
    4. Quote the coupon, if one was given (its rejection aborts the order)
    5. Work out delivery charge and total from the checkout config
    6. Redeem the coupon               ─┐ saga steps, undone in reverse
    7. Reserve stock for every line     │ order when a later step fails
    8. Persist the order               ─┘
    9. Clear the cart

``OrderPlaced`` raised by the new order reaches the notification handlers
once the unit of work commits.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront
from shopfront.errors import EmptyCart
from shopfront.ordering.cart.cart import Cart
from shopfront.ordering.checkout.pricing import PricedLine, price_order, subtotal_of
from shopfront.ordering.checkout.saga import Saga
from shopfront.ordering.checkout.shipping import ShippingInput, resolve_shipping, shipping_input
from shopfront.ordering.coupon.validation import CouponQuote, CouponValidator
from shopfront.ordering.order.order import Order, PaymentMethod
from shopfront.settings.store import CheckoutConfig, load_checkout_config

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    address_id = Identifier()
    shipping_address = Text()  # JSON object, used when no address_id is given
    payment_method = String(max_length=20, default=PaymentMethod.COD.value)
    coupon_code = String(max_length=50)
    discount = Float(min_value=0.0)
    contact_email = String(max_length=254)


class CheckoutWorkflow:
    """Runs one order placement against an explicit checkout config."""

    def __init__(self, config: CheckoutConfig):
        self.config = config
        self.products = current_domain.repository_for(Product)
        self.carts = current_domain.repository_for(Cart)
        self.orders = current_domain.repository_for(Order)
        self.coupons = CouponValidator()

    def place(
        self,
        user_id: str,
        shipping: ShippingInput | None,
        payment_method: str | None = None,
        coupon_code: str | None = None,
        discount: float | None = None,
        contact_email: str | None = None,
    ) -> Order:
        payment_method = payment_method or PaymentMethod.COD.value
        if payment_method == PaymentMethod.COD.value and not self.config.cod_enabled:
            raise ValidationError({"payment_method": ["Cash on delivery is not available"]})

        cart = self.carts.for_user(user_id)
        if cart is None or cart.is_empty:
            raise EmptyCart(user_id)

        address = resolve_shipping(shipping, user_id)
        lines = [PricedLine(self.products.find(item.product_id), item.quantity) for item in cart.items]
        subtotal = subtotal_of(lines)

        quote = self.coupons.quote(coupon_code, subtotal) if coupon_code else None
        pricing = price_order(subtotal, self.config, coupon=quote, discount=discount)

        order = Order.place(
            user_id=user_id,
            items=[line.snapshot() for line in lines],
            shipping_address=address,
            pricing=pricing,
            payment_method=payment_method,
            contact_email=contact_email,
        )

        with Saga("place-order", user_id=user_id, order_id=str(order.id)) as saga:
            if quote is not None:
                saga.run("redeem-coupon", lambda: self._redeem(quote))
            saga.run("reserve-stock", lambda: self._reserve(order))
            saga.run("persist-order", lambda: self._persist(order))

        # An order whose cart was not emptied is acceptable; clearing again is harmless.
        try:
            self._clear(cart)
        except Exception:
            logger.exception("Cart not cleared after placement", user_id=user_id, order_id=str(order.id))

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=user_id,
            total=pricing.total,
            coupon_code=pricing.coupon_code,
        )
        return order

    def _redeem(self, quote: CouponQuote):
        self.coupons.redeem(quote)
        return lambda: self.coupons.release(quote)

    def _reserve(self, order: Order):
        reserved = self.products.reserve(order.stock_lines())
        return lambda: self.products.release(reserved)

    def _persist(self, order: Order):
        self.orders.add(order)

    def _clear(self, cart: Cart):
        cart.clear()
        self.carts.add(cart)


@shopfront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        workflow = CheckoutWorkflow(load_checkout_config())
        order = workflow.place(
            user_id=command.user_id,
            shipping=shipping_input(
                address_id=command.address_id,
                address=json.loads(command.shipping_address) if command.shipping_address else None,
            ),
            payment_method=command.payment_method,
            coupon_code=command.coupon_code,
            discount=command.discount,
            contact_email=command.contact_email,
        )
        return str(order.id)
