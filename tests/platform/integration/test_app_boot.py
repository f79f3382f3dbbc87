"""The deployable app registers every domain element before serving."""

import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest
from protean import current_domain
from shopfront.catalogue.category.category import Category
from shopfront.catalogue.category.repository import CategoryRepository
from shopfront.catalogue.product.product import Product
from shopfront.catalogue.product.repository import ProductRepository
from shopfront.ordering.cart.cart import Cart
from shopfront.ordering.cart.repository import CartRepository
from shopfront.ordering.coupon.coupon import Coupon
from shopfront.ordering.coupon.repository import CouponRepository
from shopfront.ordering.order.order import Order
from shopfront.ordering.order.repository import OrderRepository

ROOT = Path(__file__).resolve().parents[3]

BOOT_SCRIPT = textwrap.dedent(
    """
    from fastapi.testclient import TestClient

    from app import app
    from protean.utils.globals import current_domain
    from shopfront.domain import shopfront
    from shopfront.ordering.cart.cart import Cart

    admin = {"X-User-Id": "admin-boot", "X-User-Role": "admin"}
    customer = {"X-User-Id": "user-boot"}
    client = TestClient(app)

    category = client.post("/categories", json={"name": "Kitchen"}, headers=admin)
    assert category.status_code == 201, category.text
    category_id = category.json()["category_id"]

    product = client.post(
        "/products",
        json={"name": "Steel Bottle", "price": 200.0, "stock": 2, "category_id": category_id},
        headers=admin,
    )
    assert product.status_code == 201, product.text

    listed = client.get(f"/categories/{category_id}/products").json()
    assert [p["name"] for p in listed["products"]] == ["Steel Bottle"], listed

    added = client.post(
        "/cart/items", json={"product_id": product.json()["product_id"], "quantity": 1}, headers=customer
    )
    assert added.status_code in (200, 201), added.text

    with shopfront.domain_context():
        assert type(current_domain.repository_for(Cart)).__name__ == "CartRepository"

    print("booted")
    """
)


def test_app_module_serves_requests_on_its_own():
    env = {**os.environ, "PYTHONPATH": str(ROOT / "src"), "PROTEAN_ENV": "test"}
    result = subprocess.run(
        [sys.executable, "-c", BOOT_SCRIPT],
        cwd=ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=120,
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().endswith("booted")


@pytest.mark.parametrize(
    "aggregate, repository",
    [
        (Product, ProductRepository),
        (Category, CategoryRepository),
        (Cart, CartRepository),
        (Coupon, CouponRepository),
        (Order, OrderRepository),
    ],
)
def test_custom_repositories_are_wired(aggregate, repository):
    assert isinstance(current_domain.repository_for(aggregate), repository)
