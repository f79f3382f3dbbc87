import os
import threading
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the domain.toml overlay before the domain is initialized."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def shopfront_bed():
    """Initialize the domain once, with every element module registered, and build its tables."""
    import shopfront.elements  # noqa: F401
    from shopfront.domain import shopfront

    bed = DomainFixture(shopfront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shopfront_bed):
    """Each test runs in a fresh domain context; stores are emptied on the way out."""
    with shopfront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _fresh_adapters(monkeypatch):
    from shopfront.notifications.channel import reset_channels
    from shopfront.payments.gateway import reset_gateway

    monkeypatch.delenv("RAZORPAY_KEY_ID", raising=False)
    monkeypatch.delenv("RAZORPAY_KEY_SECRET", raising=False)
    monkeypatch.delenv("PAYMENT_GATEWAY", raising=False)
    for name in ("EMAIL_BACKEND", "EMAIL_HOST", "EMAIL_PORT", "EMAIL_USER", "EMAIL_PASS", "EMAIL_FROM"):
        monkeypatch.delenv(name, raising=False)
    reset_gateway()
    reset_channels()
    yield
    reset_gateway()
    reset_channels()


# ---------------------------------------------------------------------------
# Factories shared by every context
# ---------------------------------------------------------------------------
SHIPPING = {
    "full_name": "Asha Rao",
    "phone": "+91-9800000000",
    "street": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "postal_code": "560001",
    "country": "India",
}


@pytest.fixture
def shipping():
    return dict(SHIPPING)


@pytest.fixture
def make_product():
    from protean import current_domain

    from shopfront.catalogue.product.product import Product

    def _make(name="Steel Bottle", price=100.0, discount=0.0, stock=10, **extra):
        product = Product.create(name=name, price=price, discount=discount, stock=stock, **extra)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture
def fill_cart():
    from protean import current_domain

    from shopfront.ordering.cart.items import AddToCart

    def _fill(user_id, *lines):
        for product, quantity in lines:
            current_domain.process(
                AddToCart(user_id=user_id, product_id=str(product.id), quantity=quantity),
                asynchronous=False,
            )

    return _fill


@pytest.fixture
def make_coupon():
    from protean import current_domain

    from shopfront.ordering.coupon.coupon import Coupon

    def _make(code="SAVE10", discount_type="percentage", discount_value=10.0, expiry_date=None, **options):
        coupon = Coupon.create(
            code=code,
            discount_type=discount_type,
            discount_value=discount_value,
            expiry_date=expiry_date or datetime.now(UTC) + timedelta(days=30),
            **options,
        )
        current_domain.repository_for(Coupon).add(coupon)
        return coupon

    return _make


@pytest.fixture
def place_order(shipping):
    import json

    from protean import current_domain

    from shopfront.ordering.checkout.placement import PlaceOrder
    from shopfront.ordering.order.order import Order

    def _place(user_id, **options):
        options.setdefault("shipping_address", json.dumps(shipping))
        order_id = current_domain.process(PlaceOrder(user_id=user_id, **options), asynchronous=False)
        return current_domain.repository_for(Order).get(order_id)

    return _place


@pytest.fixture
def run_concurrently():
    """Start every call at the same moment, each on its own thread and domain context.

    Returns one ``(succeeded, result_or_exception)`` pair per call, in call order.
    """
    from shopfront.domain import shopfront

    def _run(*calls, timeout=60):
        barrier = threading.Barrier(len(calls))
        outcomes = [None] * len(calls)

        def worker(index, call):
            with shopfront.domain_context():
                barrier.wait()
                try:
                    outcomes[index] = (True, call())
                except Exception as exc:
                    outcomes[index] = (False, exc)

        threads = [threading.Thread(target=worker, args=(index, call)) for index, call in enumerate(calls)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout)
        assert all(outcome is not None for outcome in outcomes), "a concurrent call did not finish"
        return outcomes

    return _run


def reload(aggregate):
    """Fetch a fresh copy of ``aggregate`` from its repository."""
    from protean import current_domain

    return current_domain.repository_for(type(aggregate)).get(aggregate.id)


@pytest.fixture
def fresh():
    return reload


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
CUSTOMER = {"X-User-Id": "user-http", "X-User-Email": "asha@example.com"}
ADMIN = {"X-User-Id": "admin-http", "X-User-Role": "admin"}


@pytest.fixture
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from shopfront.api import configure_app

    return TestClient(configure_app(FastAPI()))


@pytest.fixture
def customer():
    return dict(CUSTOMER)


@pytest.fixture
def admin():
    return dict(ADMIN)
