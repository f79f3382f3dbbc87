"""Review edits and removal by their author (removal also by admins)."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, Integer, Text
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.errors import ForbiddenError, NotFoundError
from shopfront.reviews.review.rating import refresh_product_rating
from shopfront.reviews.review.review import Review


@shopfront.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(min_value=1, max_value=5)
    comment = Text()


@shopfront.command(part_of="Review")
class RemoveReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_admin = Boolean(default=False)


def load_review(review_id: str) -> Review:
    try:
        return current_domain.repository_for(Review).get(review_id)
    except ObjectNotFoundError:
        raise NotFoundError(f"Review {review_id} not found", review_id=review_id) from None


@shopfront.command_handler(part_of=Review)
class ReviewAuthorHandler:
    @handle(EditReview)
    def edit_review(self, command):
        review = load_review(command.review_id)
        if review.user_id != command.user_id:
            raise ForbiddenError("You can only edit your own reviews", review_id=command.review_id)

        review.edit(rating=command.rating, comment=command.comment)
        current_domain.repository_for(Review).add(review)
        refresh_product_rating(review.product_id, changed=review)

    @handle(RemoveReview)
    def remove_review(self, command):
        review = load_review(command.review_id)
        if not command.is_admin and review.user_id != command.user_id:
            raise ForbiddenError("You can only delete your own reviews", review_id=command.review_id)

        current_domain.repository_for(Review)._dao.delete(review)
        refresh_product_rating(review.product_id, removed_id=review.id)
