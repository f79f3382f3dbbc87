"""Tests for the Review aggregate and rating summaries."""

import pytest
from protean.exceptions import ValidationError
from shopfront.reviews.review.rating import summarize
from shopfront.reviews.review.review import Review


class TestReview:
    def test_submitted_review_is_approved(self):
        review = Review.submit(product_id="prod-1", user_id="user-1", rating=4, comment="Nice")
        assert review.is_approved is True
        assert review.is_verified_purchase is False

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_must_be_one_to_five(self, rating):
        with pytest.raises(ValidationError):
            Review.submit(product_id="prod-1", user_id="user-1", rating=rating)

    def test_edit_is_partial(self):
        review = Review.submit(product_id="prod-1", user_id="user-1", rating=4, comment="Nice")
        review.edit(rating=2)
        assert review.rating == 2
        assert review.comment == "Nice"

    def test_edit_rejects_out_of_range(self):
        review = Review.submit(product_id="prod-1", user_id="user-1", rating=4)
        with pytest.raises(ValidationError):
            review.edit(rating=9)


class TestSummarize:
    def test_empty(self):
        assert summarize([]) == (0.0, 0)

    def test_average_is_rounded(self):
        assert summarize([5, 4, 4]) == (4.33, 3)
