"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's Pydantic request
schemas and the domain's validation rules (positive prices, discounts
between 0 and 100, complete shipping addresses).
"""

import hashlib
import hmac
import os
import random
import uuid

from faker import Faker

fake = Faker("en_IN")

CATEGORY_NAMES = ["Kitchen", "Home", "Electronics", "Books", "Fitness"]

# ---------- Identity ----------


def shopper_headers() -> dict:
    """Headers identifying a fresh simulated customer."""
    user_id = f"lt-user-{uuid.uuid4().hex[:10]}"
    return {"X-User-Id": user_id, "X-User-Email": f"{user_id}@example.com"}


def admin_headers() -> dict:
    return {"X-User-Id": f"lt-admin-{uuid.uuid4().hex[:6]}", "X-User-Role": "admin"}


def shipping_address() -> dict:
    """Generate a ShippingAddressSchema / AddAddressRequest payload."""
    return {
        "full_name": fake.name()[:100],
        "phone": f"+91-{random.randint(7000000000, 9999999999)}",
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "postal_code": fake.postcode()[:20],
        "country": "India",
    }


# ---------- Catalogue ----------


def category_data() -> dict:
    """Generate a CreateCategoryRequest payload; names repeat, so some creates conflict."""
    return {"name": random.choice(CATEGORY_NAMES), "description": fake.sentence()}


def product_data(stock: int | None = None, category_id: str | None = None) -> dict:
    """Generate a CreateProductRequest payload."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {fake.word().capitalize()}"[:255],
        "description": fake.paragraph(nb_sentences=2),
        "category_id": category_id,
        "price": round(random.uniform(99.0, 2499.0), 2),
        "discount": random.choice([0, 0, 5, 10, 25]),
        "stock": stock if stock is not None else random.randint(50, 500),
    }


def review_data(product_id: str) -> dict:
    return {"product_id": product_id, "rating": random.randint(1, 5), "comment": fake.sentence()}


# ---------- Ordering ----------


def coupon_data() -> dict:
    """Generate a CreateCouponRequest payload with a unique code."""
    return {
        "code": f"LT{uuid.uuid4().hex[:8].upper()}",
        "discount_type": random.choice(["percentage", "fixed"]),
        "discount_value": random.choice([5, 10, 15]),
        "expiry_date": "2099-12-31T23:59:59Z",
        "usage_limit": random.randint(5, 50),
    }


# ---------- Payments ----------


def payment_confirmation(order_id: str) -> dict:
    """A signed verify-payment payload.

    The signature is only valid when LOADTEST_KEY_SECRET matches the key
    secret configured in the store settings.
    """
    secret = os.getenv("LOADTEST_KEY_SECRET", "loadtest-secret")
    provider_order_id = f"order_{uuid.uuid4().hex[:14]}"
    provider_payment_id = f"pay_{uuid.uuid4().hex[:14]}"
    message = f"{provider_order_id}|{provider_payment_id}".encode()
    return {
        "orderId": order_id,
        "providerOrderId": provider_order_id,
        "providerPaymentId": provider_payment_id,
        "signature": hmac.new(secret.encode(), message, hashlib.sha256).hexdigest(),
    }
