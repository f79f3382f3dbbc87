"""Ordering API package."""

from shopfront.ordering.api.routes import cart_router, coupon_router, order_router

__all__ = ["cart_router", "order_router", "coupon_router"]
