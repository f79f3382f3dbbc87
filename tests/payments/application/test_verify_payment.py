"""Application tests for payment reconciliation."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from shopfront.errors import OrderNotFound, SignatureMismatch
from shopfront.ordering.order.order import Order
from shopfront.payments.gateway import GatewayError
from shopfront.payments.payment.reconciliation import VerifyPayment
from shopfront.payments.payment.signature import compute_signature
from shopfront.payments.payment.status import UpdatePaymentStatus
from shopfront.settings.management import UpdateStoreSettings

SECRET = "rzp_secret"
USER = "user-pay"


@pytest.fixture
def keyed():
    current_domain.process(UpdateStoreSettings(razorpay_key_id="rzp_key", razorpay_key_secret=SECRET), asynchronous=False)


@pytest.fixture
def order(make_product, fill_cart, place_order):
    fill_cart(USER, (make_product(price=250.0), 1))
    return place_order(USER, payment_method="razorpay")


def _verify(order_id, signature=None, payment_id="pay_001"):
    return current_domain.process(
        VerifyPayment(
            order_id=order_id,
            provider_order_id="order_001",
            provider_payment_id=payment_id,
            signature=signature or compute_signature(SECRET, "order_001", payment_id),
        ),
        asynchronous=False,
    )


class TestVerifyPayment:
    def test_valid_signature_marks_order_paid(self, keyed, order, fresh):
        assert _verify(order.id) is True

        paid = fresh(order)
        assert paid.is_paid is True
        assert paid.payment_status == "paid"
        assert paid.paid_at is not None
        assert paid.payment_result.provider_payment_id == "pay_001"

    def test_tampered_signature_leaves_order_unchanged(self, keyed, order, fresh):
        with pytest.raises(SignatureMismatch):
            _verify(order.id, signature="0" * 64)

        unchanged = fresh(order)
        assert unchanged.is_paid is False
        assert unchanged.payment_status == "pending"

    def test_non_ascii_signature_is_rejected_as_mismatch(self, keyed, order, fresh):
        with pytest.raises(SignatureMismatch):
            _verify(order.id, signature="sig-über-é")

        assert fresh(order).is_paid is False

    def test_repeat_callback_is_idempotent(self, keyed, order, fresh):
        assert _verify(order.id) is True
        assert _verify(order.id, payment_id="pay_002") is False
        assert fresh(order).payment_result.provider_payment_id == "pay_001"

    def test_secret_from_environment(self, monkeypatch, order, fresh):
        monkeypatch.setenv("RAZORPAY_KEY_SECRET", SECRET)
        _verify(order.id)
        assert fresh(order).is_paid

    def test_missing_secret_is_a_gateway_error(self, order):
        with pytest.raises(GatewayError):
            _verify(order.id)

    def test_unknown_order(self, keyed):
        with pytest.raises(OrderNotFound):
            _verify("missing")

    def test_payment_on_cancelled_order_is_recorded(self, keyed, order, fresh):
        from shopfront.ordering.order.cancellation import CancelOrder

        current_domain.process(CancelOrder(order_id=order.id, user_id=USER), asynchronous=False)
        _verify(order.id)

        late = fresh(order)
        assert late.is_cancelled
        assert late.is_paid


class TestManualPaymentStatus:
    def test_admin_marks_cod_order_paid(self, order):
        current_domain.process(UpdatePaymentStatus(order_id=order.id, payment_status="paid"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order.id).is_paid

    def test_unknown_payment_status(self, order):
        with pytest.raises(ValidationError):
            current_domain.process(UpdatePaymentStatus(order_id=order.id, payment_status="refunded"), asynchronous=False)
