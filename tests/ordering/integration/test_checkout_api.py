"""Integration tests for cart, checkout, order management and coupon endpoints."""

import pytest


@pytest.fixture
def product_id(make_product):
    return str(make_product(name="Steel Bottle", price=100.0, stock=10).id)


@pytest.fixture
def filled_cart(client, customer, product_id):
    response = client.post("/cart/items", json={"product_id": product_id, "quantity": 2}, headers=customer)
    assert response.status_code == 201
    return response.json()


def _checkout(client, headers, shipping, **body):
    return client.post("/orders", json={"shipping_address": shipping, **body}, headers=headers)


class TestCartAPI:
    def test_cart_shows_current_prices_and_subtotal(self, filled_cart, product_id):
        assert filled_cart["items"][0]["product_id"] == product_id
        assert filled_cart["items"][0]["line_total"] == 200.0
        assert filled_cart["subtotal"] == 200.0

    def test_update_and_remove(self, client, customer, filled_cart, product_id):
        body = client.put(f"/cart/items/{product_id}", json={"quantity": 3}, headers=customer).json()
        assert body["subtotal"] == 300.0

        body = client.delete(f"/cart/items/{product_id}", headers=customer).json()
        assert body["items"] == []

    def test_adding_beyond_stock_conflicts(self, client, customer, product_id):
        response = client.post("/cart/items", json={"product_id": product_id, "quantity": 11}, headers=customer)
        assert response.status_code == 409
        assert response.json()["error"] == "insufficient_stock"


class TestCheckoutAPI:
    def test_place_order_with_coupon(self, client, customer, filled_cart, make_coupon, shipping):
        make_coupon(code="SAVE10", discount_value=10.0, min_order_amount=50.0)

        response = _checkout(client, customer, shipping, coupon_code="SAVE10")

        assert response.status_code == 201
        pricing = response.json()["order"]["pricing"]
        assert pricing == {
            "subtotal": 200.0,
            "coupon_code": "SAVE10",
            "coupon_discount": 20.0,
            "discount": 0.0,
            "delivery_charge": 50.0,
            "total": 230.0,
        }
        assert client.get("/cart", headers=customer).json()["items"] == []

    def test_empty_cart_is_a_bad_request(self, client, customer, shipping):
        response = _checkout(client, customer, shipping)
        assert response.status_code == 400
        assert response.json()["error"] == "empty_cart"

    def test_unknown_coupon_is_not_found(self, client, customer, filled_cart, shipping):
        response = _checkout(client, customer, shipping, coupon_code="NOPE")
        assert response.status_code == 404
        assert response.json()["message"] == "Coupon is invalid or expired"

    def test_missing_address_is_a_bad_request(self, client, customer, filled_cart):
        response = client.post("/orders", json={}, headers=customer)
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_address"


class TestOrderManagementAPI:
    @pytest.fixture
    def order_id(self, client, customer, filled_cart, shipping):
        return _checkout(client, customer, shipping).json()["order_id"]

    def test_customer_sees_own_orders(self, client, customer, order_id):
        orders = client.get("/orders", headers=customer).json()
        assert [o["id"] for o in orders] == [order_id]
        assert client.get(f"/orders/{order_id}", headers=customer).status_code == 200

    def test_other_customers_are_forbidden(self, client, order_id):
        response = client.get(f"/orders/{order_id}", headers={"X-User-Id": "someone-else"})
        assert response.status_code == 403

    def test_cancel_restores_stock(self, client, customer, order_id, product_id):
        assert client.get(f"/products/{product_id}").json()["stock"] == 8

        response = client.put(f"/orders/{order_id}/cancel", json={"reason": "Changed my mind"}, headers=customer)

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert client.get(f"/products/{product_id}").json()["stock"] == 10

    def test_admin_moves_order_forward(self, client, admin, customer, order_id):
        for status in ("processing", "shipped", "out-for-delivery", "delivered"):
            response = client.put(f"/orders/{order_id}/status", json={"status": status}, headers=admin)
            assert response.status_code == 200

        body = client.get(f"/orders/{order_id}", headers=customer).json()
        assert body["is_delivered"] is True

        response = client.put(f"/orders/{order_id}/cancel", headers=customer)
        assert response.status_code == 409
        assert response.json()["error"] == "invalid_transition"

        response = client.put(f"/orders/{order_id}/return", json={"reason": "Damaged"}, headers=customer)
        assert response.json()["status"] == "return-requested"

    def test_customers_cannot_change_status(self, client, customer, order_id):
        response = client.put(f"/orders/{order_id}/status", json={"status": "processing"}, headers=customer)
        assert response.status_code == 403

    def test_admin_settles_payment(self, client, admin, order_id):
        response = client.put(f"/orders/{order_id}/payment-status", json={"payment_status": "paid"}, headers=admin)
        assert response.json()["is_paid"] is True


class TestCouponAPI:
    def test_apply_previews_without_redeeming(self, client, customer, filled_cart, make_coupon, fresh):
        coupon = make_coupon(code="SAVE10", discount_value=10.0)

        response = client.post("/coupons/apply", json={"code": "save10"}, headers=customer)

        assert response.status_code == 200
        assert response.json() == {"code": "SAVE10", "subtotal": 200.0, "discount": 20.0}
        assert fresh(coupon).used_count == 0

    def test_minimum_not_met(self, client, customer, make_coupon):
        make_coupon(code="BIG", min_order_amount=1000.0)
        response = client.post("/coupons/apply", json={"code": "BIG", "subtotal": 100.0}, headers=customer)
        assert response.status_code == 400
        assert response.json()["message"] == "Minimum order amount is 1000.00"

    def test_admin_crud(self, client, admin):
        response = client.post(
            "/coupons",
            json={
                "code": "flat100",
                "discount_type": "fixed",
                "discount_value": 100,
                "expiry_date": "2099-01-01T00:00:00Z",
                "usage_limit": 5,
            },
            headers=admin,
        )
        assert response.status_code == 201
        coupon_id = response.json()["coupon_id"]

        duplicate = client.post(
            "/coupons",
            json={"code": "FLAT100", "discount_type": "fixed", "discount_value": 1, "expiry_date": "2099-01-01T00:00:00Z"},
            headers=admin,
        )
        assert duplicate.status_code == 409

        client.put(f"/coupons/{coupon_id}", json={"is_active": False}, headers=admin)
        assert client.get(f"/coupons/{coupon_id}", headers=admin).json()["is_active"] is False

        assert client.delete(f"/coupons/{coupon_id}", headers=admin).status_code == 200
        assert client.get("/coupons", headers=admin).json() == []
