"""Application tests for notifications raised by order, payment and cart events."""

import pytest
from protean import current_domain
from shopfront.notifications.channel import get_email_channel
from shopfront.notifications.notification.notification import ADMIN_RECIPIENT, Notification
from shopfront.notifications.notification.inbox import inbox_of
from shopfront.ordering.order.cancellation import CancelOrder
from shopfront.ordering.order.fulfillment import UpdateOrderStatus
from shopfront.payments.payment.status import UpdatePaymentStatus

USER = "user-notify"


def _titles(recipient_id):
    return [n.title for n in inbox_of(recipient_id)]


@pytest.fixture
def order(make_product, fill_cart, place_order):
    fill_cart(USER, (make_product(), 1))
    return place_order(USER, contact_email="asha@example.com")


class TestOrderNotifications:
    def test_placement_notifies_customer_and_admin(self, order):
        assert "Order Placed" in _titles(USER)
        assert "New Order" in _titles(ADMIN_RECIPIENT)

    def test_placement_sends_confirmation_email(self, order):
        sent = get_email_channel().addressed_to("asha@example.com")
        assert "Order Placed" in [mail.subject for mail in sent]
        assert all(mail.html.startswith("<p>") for mail in sent)

    def test_status_change_notifies_customer(self, order):
        current_domain.process(UpdateOrderStatus(order_id=order.id, status="processing"), asynchronous=False)
        assert "Order Processing" in _titles(USER)

    def test_cancellation_notifies_both(self, order):
        current_domain.process(CancelOrder(order_id=order.id, user_id=USER), asynchronous=False)
        assert "Order Cancelled" in _titles(USER)
        assert "Order Cancelled" in _titles(ADMIN_RECIPIENT)

    def test_payment_notifies_both(self, order):
        current_domain.process(UpdatePaymentStatus(order_id=order.id, payment_status="paid"), asynchronous=False)
        assert "Payment Received" in _titles(USER)
        assert "Payment Received" in _titles(ADMIN_RECIPIENT)

    def test_cart_addition_notifies_customer(self, make_product, fill_cart):
        fill_cart("shopper", (make_product(), 1))
        assert _titles("shopper") == ["Added to Cart"]


class TestDeliveryFailures:
    def test_email_failure_does_not_fail_the_order(self, make_product, fill_cart, place_order):
        get_email_channel().fail_with("mailbox full")
        fill_cart(USER, (make_product(), 1))

        order = place_order(USER, contact_email="asha@example.com")

        assert order.id is not None
        assert "Order Placed" in _titles(USER)

    def test_inbox_failure_does_not_fail_the_order(self, monkeypatch, make_product, fill_cart, place_order):
        product = make_product()
        fill_cart(USER, (product, 1))

        def broken(*args, **kwargs):
            raise RuntimeError("inbox unavailable")

        monkeypatch.setattr(Notification, "create", broken)

        order = place_order(USER)

        assert order.status == "pending"
