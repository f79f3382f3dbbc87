"""Review aggregate — one customer's rating and comment on one product."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, Text

from shopfront.domain import shopfront


@shopfront.aggregate
class Review:
    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text()
    is_verified_purchase: Boolean(default=False)
    is_approved: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def submit(cls, product_id, user_id, rating, comment=None, is_verified_purchase=False):
        now = datetime.now(UTC)
        return cls(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            comment=comment,
            is_verified_purchase=is_verified_purchase,
            created_at=now,
            updated_at=now,
        )

    def edit(self, rating=None, comment=None):
        if rating is not None:
            if not 1 <= rating <= 5:
                raise ValidationError({"rating": ["Rating must be between 1 and 5"]})
            self.rating = rating
        if comment is not None:
            self.comment = comment
        self.updated_at = datetime.now(UTC)

    def set_approval(self, approved: bool):
        self.is_approved = approved
        self.updated_at = datetime.now(UTC)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "product_id": str(self.product_id),
            "user_id": str(self.user_id),
            "rating": self.rating,
            "comment": self.comment,
            "is_verified_purchase": self.is_verified_purchase,
            "is_approved": self.is_approved,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
