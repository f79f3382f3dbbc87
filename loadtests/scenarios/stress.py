"""Stress scenarios for stock contention.

HotProductUser makes every simulated shopper buy the same product at the
same time. Conditional stock updates must never oversell: once the run
ends, units sold plus the remaining stock equals the initial stock.
SpikeUser simulates a sudden burst of anonymous catalog reads.
"""

import uuid

import requests
from locust import HttpUser, constant_pacing, events, task

from loadtests.data_generators import admin_headers, product_data, shipping_address, shopper_headers

HOT_STOCK = 500
_hot = {"product_id": None}


@events.test_start.add_listener
def create_hot_product(environment, **_kwargs):
    """Create the contended product once per run."""
    if environment.host is None:
        return

    response = requests.post(
        f"{environment.host}/products",
        json={**product_data(stock=HOT_STOCK), "name": f"Hot Item {uuid.uuid4().hex[:6]}"},
        headers=admin_headers(),
        timeout=10,
    )
    if response.status_code == 201:
        _hot["product_id"] = response.json()["product_id"]


class HotProductUser(HttpUser):
    """Every task adds one unit of the hot product and checks out at once."""

    wait_time = constant_pacing(0.2)

    def on_start(self):
        self.headers = shopper_headers()

    @task
    def buy_one(self):
        if _hot["product_id"] is None:
            return
        added = self.client.post(
            "/cart/items",
            json={"product_id": _hot["product_id"], "quantity": 1},
            headers=self.headers,
            name="[HOT] POST /cart/items",
        )
        if added.status_code != 201:
            return
        with self.client.post(
            "/orders",
            json={"shipping_address": shipping_address()},
            headers=self.headers,
            catch_response=True,
            name="[HOT] POST /orders",
        ) as resp:
            if resp.status_code == 409:
                resp.success()
                self.client.delete("/cart", headers=self.headers, name="[HOT] DELETE /cart")


class SpikeUser(HttpUser):
    """Sudden anonymous read burst against the catalog."""

    wait_time = constant_pacing(0.05)

    @task(5)
    def list_products(self):
        self.client.get("/products", name="[SPIKE] GET /products")

    @task(1)
    def settings(self):
        self.client.get("/settings", name="[SPIKE] GET /settings")
