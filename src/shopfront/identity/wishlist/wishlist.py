"""Wishlist — products a user has liked, one entry per user and product."""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront

logger = structlog.get_logger(__name__)


@shopfront.aggregate
class WishlistEntry:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    added_at: DateTime()


@shopfront.command(part_of="WishlistEntry")
class ToggleWishlist:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


def wishlist_of(user_id: str) -> list[WishlistEntry]:
    repo = current_domain.repository_for(WishlistEntry)
    return repo._dao.query.filter(user_id=user_id).order_by("-added_at").all().items


def like_count(product_id: str) -> int:
    repo = current_domain.repository_for(WishlistEntry)
    return repo._dao.query.filter(product_id=product_id).all().total


@shopfront.command_handler(part_of=WishlistEntry)
class WishlistHandler:
    @handle(ToggleWishlist)
    def toggle(self, command):
        """Like the product, or unlike it when already liked."""
        current_domain.repository_for(Product).find(command.product_id)

        repo = current_domain.repository_for(WishlistEntry)
        existing = repo._dao.query.filter(user_id=command.user_id, product_id=command.product_id).all().items

        if existing:
            for entry in existing:
                repo._dao.delete(entry)
            liked = False
        else:
            repo.add(
                WishlistEntry(
                    user_id=command.user_id,
                    product_id=command.product_id,
                    added_at=datetime.now(UTC),
                )
            )
            liked = True

        logger.info("Wishlist toggled", user_id=command.user_id, product_id=command.product_id, liked=liked)
        return {"liked": liked}
