"""Review moderation — admins approve or hide reviews."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.reviews.review.editing import load_review
from shopfront.reviews.review.rating import refresh_product_rating
from shopfront.reviews.review.review import Review

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    approved = Boolean(required=True)


@shopfront.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate(self, command):
        review = load_review(command.review_id)
        review.set_approval(command.approved)
        current_domain.repository_for(Review).add(review)
        refresh_product_rating(review.product_id, changed=review)
        logger.info("Review moderated", review_id=str(review.id), approved=command.approved)
