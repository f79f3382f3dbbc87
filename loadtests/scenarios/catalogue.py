"""Catalogue load test scenarios.

A browsing journey that reads the catalog the way a storefront does, and
an admin journey that keeps it stocked. Browsing is read-only and does not
need an identity.
"""

import random

from locust import SequentialTaskSet, task

from loadtests.data_generators import admin_headers, category_data, product_data, review_data, shopper_headers
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState, ShopperState


class BrowseCatalogJourney(SequentialTaskSet):
    """Categories -> List -> Category shelf -> Search -> Product detail -> Reviews -> Like."""

    def on_start(self):
        self.state = ShopperState(headers=shopper_headers())

    @task
    def list_categories(self):
        with self.client.get("/categories", catch_response=True, name="GET /categories") as resp:
            if resp.status_code == 200:
                self.state.category_ids = [c["id"] for c in resp.json()]
            else:
                resp.failure(f"List categories failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def list_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.state.product_ids = [p["id"] for p in resp.json()]
            else:
                resp.failure(f"List products failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()
        if not self.state.product_ids:
            self.interrupt()

    @task
    def browse_category(self):
        if not self.state.category_ids:
            return
        category_id = random.choice(self.state.category_ids)
        self.client.get(f"/categories/{category_id}/products", name="GET /categories/{id}/products")

    @task
    def search(self):
        self.client.get("/products", params={"q": "steel"}, name="GET /products?q")

    @task
    def view_product(self):
        product_id = random.choice(self.state.product_ids)
        self.client.get(f"/products/{product_id}", name="GET /products/{id}")
        self.client.get(f"/reviews/product/{product_id}", name="GET /reviews/product/{id}")

    @task
    def like_product(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.post(
            f"/wishlist/{product_id}/toggle",
            headers=self.state.headers,
            catch_response=True,
            name="POST /wishlist/{id}/toggle",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Wishlist toggle failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def review_product(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.post(
            "/reviews",
            json=review_data(product_id),
            headers=self.state.headers,
            catch_response=True,
            name="POST /reviews",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Review failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CatalogAdminJourney(SequentialTaskSet):
    """Create a category -> Create products in it -> Reprice one -> Restock one.

    Keeps the catalog populated for the shopper journeys.
    """

    def on_start(self):
        self.state = AdminState(headers=admin_headers())

    @task
    def create_category(self):
        with self.client.post(
            "/categories",
            json=category_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_id = resp.json()["category_id"]
            elif resp.status_code == 409:
                # Name already taken by another admin; file products without one
                resp.success()
            else:
                resp.failure(f"Create category failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def create_products(self):
        for _ in range(3):
            with self.client.post(
                "/products",
                json=product_data(category_id=self.state.category_id),
                headers=self.state.headers,
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code} {extract_error_detail(resp)}")
        if not self.state.product_ids:
            self.interrupt()

    @task
    def reprice(self):
        product_id = random.choice(self.state.product_ids)
        self.client.put(
            f"/products/{product_id}",
            json={"discount": random.choice([0, 10, 20])},
            headers=self.state.headers,
            name="PUT /products/{id}",
        )

    @task
    def restock(self):
        product_id = random.choice(self.state.product_ids)
        self.client.put(
            f"/products/{product_id}",
            json={"stock": random.randint(100, 500)},
            headers=self.state.headers,
            name="PUT /products/{id}",
        )

    @task
    def done(self):
        self.interrupt()
