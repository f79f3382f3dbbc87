"""Payments load test scenarios.

Online checkout: place a razorpay order, open a provider order for its
total, then post the signed confirmation twice (the second one must be
accepted as already verified). Run the app with LOADTEST_KEY_SECRET set
as the store's key secret so the signatures match.
"""

from locust import task

from loadtests.data_generators import payment_confirmation
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.ordering import _ShopperJourney


class OnlinePaymentJourney(_ShopperJourney):
    """Fill cart -> Place razorpay order -> Create provider order -> Verify -> Verify again."""

    @task
    def checkout(self):
        self.place_order(payment_method="razorpay")

    @task
    def create_provider_order(self):
        with self.client.post(
            "/payments/create-order",
            json={"amount": self.state.order_total, "receipt": self.state.order_id[:40]},
            headers=self.state.headers,
            catch_response=True,
            name="POST /payments/create-order",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Create provider order failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def verify(self):
        self.confirmation = payment_confirmation(self.state.order_id)
        with self.client.post(
            "/payments/verify-payment",
            json=self.confirmation,
            headers=self.state.headers,
            catch_response=True,
            name="POST /payments/verify-payment",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Verify failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def verify_again(self):
        with self.client.post(
            "/payments/verify-payment",
            json=self.confirmation,
            headers=self.state.headers,
            catch_response=True,
            name="POST /payments/verify-payment [repeat]",
        ) as resp:
            if resp.status_code != 200 or resp.json().get("message") != "Payment already verified":
                resp.failure(f"Repeat verify not idempotent: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()
