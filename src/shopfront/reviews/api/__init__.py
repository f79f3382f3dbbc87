"""Reviews API package."""

from shopfront.reviews.api.routes import review_router

__all__ = ["review_router"]
