"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
users. State holds the ids returned by creation endpoints so follow-up
requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """One simulated customer's journey from browsing to an order."""

    headers: dict = field(default_factory=dict)
    category_ids: list[str] = field(default_factory=list)
    product_ids: list[str] = field(default_factory=list)
    cart_lines: int = 0
    order_id: str | None = None
    order_total: float = 0.0
    current_status: str | None = None


@dataclass
class AdminState:
    """Categories, products and coupons a simulated admin created."""

    headers: dict = field(default_factory=dict)
    category_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    coupon_codes: list[str] = field(default_factory=list)
