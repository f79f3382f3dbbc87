"""Shopfront domain — the single Protean domain every aggregate registers with.

One domain keeps the order-placement workflow (coupon redemption, stock
reservation, order persistence and cart clearing) inside a single unit of
work backed by one database.
"""

import structlog
from protean.domain import Domain

shopfront = Domain(name="shopfront")

logger = structlog.get_logger(__name__)
