"""Ordering load test scenarios.

Stateful SequentialTaskSet journeys covering the cart, checkout with and
without a coupon, cancellation, and the admin side of fulfilment. Each
simulated shopper has its own identity, so carts never collide.
"""

import random

from locust import SequentialTaskSet, task

from loadtests.data_generators import admin_headers, coupon_data, shipping_address, shopper_headers
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    """Shared first steps: pick products and fill the cart."""

    lines = 2

    def on_start(self):
        self.state = ShopperState(headers=shopper_headers())

    @task
    def pick_products(self):
        with self.client.get("/products", params={"status": "available"}, catch_response=True, name="GET /products") as resp:
            in_stock = [p["id"] for p in resp.json() if p["stock"] > 5] if resp.status_code == 200 else []
            if not in_stock:
                resp.success()
                self.interrupt()
            self.state.product_ids = random.sample(in_stock, min(self.lines, len(in_stock)))

    @task
    def fill_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": random.randint(1, 2)},
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 201:
                    self.state.cart_lines += 1
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} {extract_error_detail(resp)}")
        if not self.state.cart_lines:
            self.interrupt()

    def place_order(self, **body):
        with self.client.post(
            "/orders",
            json={"shipping_address": shipping_address(), **body},
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                order = resp.json()["order"]
                self.state.order_id = order["id"]
                self.state.order_total = order["pricing"]["total"]
                self.state.current_status = order["status"]
            elif resp.status_code == 409:
                # Another shopper took the last units; the cart stays intact.
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()


class CartLifecycleJourney(_ShopperJourney):
    """Fill cart -> Change quantity -> Remove a line -> Clear."""

    @task
    def change_quantity(self):
        product_id = self.state.product_ids[0]
        self.client.put(
            f"/cart/items/{product_id}",
            json={"quantity": 1},
            headers=self.state.headers,
            name="PUT /cart/items/{id}",
        )

    @task
    def remove_line(self):
        product_id = self.state.product_ids[-1]
        self.client.delete(f"/cart/items/{product_id}", headers=self.state.headers, name="DELETE /cart/items/{id}")

    @task
    def clear(self):
        self.client.delete("/cart", headers=self.state.headers, name="DELETE /cart")

    @task
    def done(self):
        self.interrupt()


class CheckoutJourney(_ShopperJourney):
    """Fill cart -> View cart -> Place COD order -> View orders -> Read notifications."""

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.state.headers, name="GET /cart")

    @task
    def checkout(self):
        self.place_order(payment_method="COD")

    @task
    def view_orders(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")
        self.client.get(f"/orders/{self.state.order_id}", headers=self.state.headers, name="GET /orders/{id}")

    @task
    def read_notifications(self):
        self.client.get("/notifications", headers=self.state.headers, name="GET /notifications")
        self.client.put("/notifications/read-all", headers=self.state.headers, name="PUT /notifications/read-all")

    @task
    def done(self):
        self.interrupt()


class CouponCheckoutJourney(_ShopperJourney):
    """Admin creates a coupon -> Fill cart -> Preview coupon -> Place order with it."""

    def on_start(self):
        super().on_start()
        self.coupon_code = None

    @task
    def create_coupon(self):
        payload = coupon_data()
        with self.client.post(
            "/coupons", json=payload, headers=admin_headers(), catch_response=True, name="POST /coupons"
        ) as resp:
            if resp.status_code == 201:
                self.coupon_code = payload["code"]
            else:
                resp.failure(f"Create coupon failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def preview_coupon(self):
        with self.client.post(
            "/coupons/apply",
            json={"code": self.coupon_code},
            headers=self.state.headers,
            catch_response=True,
            name="POST /coupons/apply",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Coupon preview failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def checkout(self):
        self.place_order(coupon_code=self.coupon_code)

    @task
    def done(self):
        self.interrupt()


class OrderCancellationJourney(_ShopperJourney):
    """Fill cart -> Place order -> Cancel it."""

    @task
    def checkout(self):
        self.place_order()

    @task
    def cancel(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/cancel",
            json={"reason": "Changed my mind"},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "cancelled"
            else:
                resp.failure(f"Cancel failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class FulfilmentJourney(_ShopperJourney):
    """Fill cart -> Place order -> Admin walks it to delivered -> Customer requests a return."""

    @task
    def checkout(self):
        self.place_order()

    @task
    def fulfil(self):
        headers = admin_headers()
        for status in ("processing", "shipped", "out-for-delivery", "delivered"):
            with self.client.put(
                f"/orders/{self.state.order_id}/status",
                json={"status": status},
                headers=headers,
                catch_response=True,
                name="PUT /orders/{id}/status",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Move to {status} failed: {resp.status_code} {extract_error_detail(resp)}")
                    self.interrupt()
        self.state.current_status = "delivered"

    @task
    def request_return(self):
        self.client.put(
            f"/orders/{self.state.order_id}/return",
            json={"reason": "Not as described"},
            headers=self.state.headers,
            name="PUT /orders/{id}/return",
        )

    @task
    def done(self):
        self.interrupt()
