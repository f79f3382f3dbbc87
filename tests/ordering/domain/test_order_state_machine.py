"""Tests for the Order lifecycle — forward-only transitions and cancellation."""

import pytest
from protean.exceptions import ValidationError
from shopfront.errors import InvalidTransition
from shopfront.ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged, ReturnRequested
from shopfront.ordering.order.order import Order, OrderPricing, OrderStatus, ShippingAddress

PATH = [OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED]


def _order():
    return Order.place(
        user_id="user-1",
        items=[
            {
                "product_id": "prod-1",
                "name": "Steel Bottle",
                "quantity": 2,
                "unit_price": 100.0,
                "discount": 0.0,
                "final_price": 100.0,
            }
        ],
        shipping_address=ShippingAddress(
            full_name="Asha Rao", street="12 MG Road", city="Bengaluru", postal_code="560001", country="India"
        ),
        pricing=OrderPricing(subtotal=200.0, delivery_charge=50.0, total=250.0),
    )


def _order_at(status):
    order = _order()
    for step in PATH:
        if order.status == status.value:
            break
        order.advance(step)
    order._events.clear()
    return order


class TestPlacement:
    def test_new_order_is_pending_and_unpaid(self):
        order = _order()
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == "pending"
        assert order.is_paid is False

    def test_placement_raises_order_placed(self):
        order = _order()
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.item_count == 2
        assert event.total == 250.0

    def test_order_needs_items(self):
        with pytest.raises(ValidationError):
            Order.place(
                user_id="user-1",
                items=[],
                shipping_address=ShippingAddress(
                    full_name="A", street="S", city="C", postal_code="1", country="IN"
                ),
                pricing=OrderPricing(subtotal=0.0, total=0.0),
            )

    def test_stock_lines_mirror_items(self):
        lines = _order().stock_lines()
        assert [(line.product_id, line.quantity) for line in lines] == [("prod-1", 2)]


class TestForwardPath:
    def test_full_path_to_delivered(self):
        order = _order()
        for step in PATH:
            order.advance(step)
        assert order.status == OrderStatus.DELIVERED.value
        assert order.is_delivered is True
        assert order.delivered_at is not None

    def test_advance_raises_status_changed(self):
        order = _order_at(OrderStatus.PENDING)
        order.advance(OrderStatus.PROCESSING)
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "processing"

    @pytest.mark.parametrize(
        "current, target",
        [
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.SHIPPED, OrderStatus.PROCESSING),
            (OrderStatus.DELIVERED, OrderStatus.SHIPPED),
        ],
    )
    def test_skipping_or_reversing_is_rejected(self, current, target):
        order = _order_at(current)
        with pytest.raises(InvalidTransition):
            order.advance(target)
        assert order.status == current.value

    def test_advance_cannot_cancel(self):
        with pytest.raises(ValidationError):
            _order().advance(OrderStatus.CANCELLED)


class TestCancellation:
    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.PROCESSING])
    def test_cancellable_states(self, status):
        order = _order_at(status)
        order.cancel(reason="Changed my mind", cancelled_by="customer")
        assert order.is_cancelled
        assert order.cancellation_reason == "Changed my mind"
        assert isinstance(order._events[0], OrderCancelled)

    @pytest.mark.parametrize("status", [OrderStatus.SHIPPED, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED])
    def test_later_states_cannot_be_cancelled(self, status):
        order = _order_at(status)
        with pytest.raises(InvalidTransition):
            order.cancel()

    def test_cancelled_is_terminal(self):
        order = _order()
        order.cancel()
        with pytest.raises(InvalidTransition):
            order.advance(OrderStatus.PROCESSING)


class TestReturns:
    def test_delivered_order_can_request_return(self):
        order = _order_at(OrderStatus.DELIVERED)
        order.request_return("Damaged")
        assert order.status == OrderStatus.RETURN_REQUESTED.value
        assert isinstance(order._events[0], ReturnRequested)

    def test_undelivered_order_cannot_request_return(self):
        order = _order_at(OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransition):
            order.request_return("Too slow")


class TestPayment:
    def test_confirm_payment_marks_paid(self):
        order = _order()
        assert order.confirm_payment("order_1", "pay_1", "sig") is True
        assert order.is_paid
        assert order.payment_status == "paid"
        assert order.payment_result.provider_payment_id == "pay_1"

    def test_confirm_payment_is_idempotent(self):
        order = _order()
        order.confirm_payment("order_1", "pay_1", "sig")
        order._events.clear()
        assert order.confirm_payment("order_1", "pay_2", "sig") is False
        assert order.payment_result.provider_payment_id == "pay_1"
        assert order._events == []

    def test_paid_order_cannot_fail(self):
        order = _order()
        order.confirm_payment()
        with pytest.raises(ValidationError):
            order.fail_payment()
