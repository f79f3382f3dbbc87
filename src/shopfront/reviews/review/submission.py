"""SubmitReview — a customer reviews a product.

One review per customer and product. The review is marked as a verified
purchase when one of the customer's paid orders contains the product.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront
from shopfront.errors import ConflictError
from shopfront.ordering.order.order import Order
from shopfront.reviews.review.rating import refresh_product_rating
from shopfront.reviews.review.review import Review

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text()


def has_purchased(user_id: str, product_id: str) -> bool:
    orders = current_domain.repository_for(Order).paid_orders_of(user_id)
    return any(str(item.product_id) == str(product_id) for order in orders for item in order.items)


@shopfront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        current_domain.repository_for(Product).find(command.product_id)

        repo = current_domain.repository_for(Review)
        existing = repo._dao.query.filter(user_id=command.user_id, product_id=command.product_id).all()
        if existing.items:
            raise ConflictError("You have already reviewed this product", product_id=command.product_id)

        review = Review.submit(
            product_id=command.product_id,
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
            is_verified_purchase=has_purchased(command.user_id, command.product_id),
        )
        repo.add(review)
        refresh_product_rating(command.product_id, changed=review)

        logger.info("Review submitted", review_id=str(review.id), product_id=command.product_id)
        return str(review.id)
