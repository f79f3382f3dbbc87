"""Mixed storefront workload scenario.

Combines the browsing, cart, checkout, payment and admin journeys with
weights that model a typical storefront: mostly reads, a steady stream of
checkouts, and occasional catalog upkeep. This is the recommended
scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import BrowseCatalogJourney, CatalogAdminJourney
from loadtests.scenarios.ordering import (
    CartLifecycleJourney,
    CheckoutJourney,
    CouponCheckoutJourney,
    FulfilmentJourney,
    OrderCancellationJourney,
)
from loadtests.scenarios.payments import OnlinePaymentJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Browsing (40%): catalog reads, reviews and likes.
    Cart (15%): add, change and abandon.
    Checkout (30%): COD, coupon and online payment orders.
    After-sales (10%): cancellations, fulfilment and returns.
    Admin (5%): product creation and restocking.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseCatalogJourney: 8,
        CartLifecycleJourney: 3,
        CheckoutJourney: 3,
        CouponCheckoutJourney: 1,
        OnlinePaymentJourney: 2,
        OrderCancellationJourney: 1,
        FulfilmentJourney: 1,
        CatalogAdminJourney: 1,
    }
