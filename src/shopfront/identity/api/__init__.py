"""Identity API package — address book and wishlist."""

from shopfront.identity.api.routes import address_router, wishlist_router

__all__ = ["address_router", "wishlist_router"]
