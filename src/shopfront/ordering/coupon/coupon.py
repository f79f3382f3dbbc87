"""Coupon aggregate — an order-level discount code.

Codes are case-insensitive and stored upper-case. A coupon is valid while
it is active and unexpired; ``used_count`` never exceeds ``usage_limit``
when a limit is set.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from shopfront.domain import shopfront
from shopfront.errors import CouponUsageExceeded


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


def as_utc(moment: datetime) -> datetime:
    """Naive timestamps are read as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


@shopfront.aggregate
class Coupon:
    code: String(required=True, max_length=50)
    discount_type: String(required=True, choices=DiscountType)
    discount_value: Float(required=True, min_value=0.0)
    min_order_amount: Float(default=0.0, min_value=0.0)
    max_discount_amount: Float(min_value=0.0)
    expiry_date: DateTime(required=True)
    is_active: Boolean(default=True)
    usage_limit: Integer(min_value=1)
    used_count: Integer(default=0, min_value=0)
    created_at: DateTime()

    @invariant.post
    def usage_must_stay_within_limit(self):
        if self.usage_limit is not None and self.used_count > self.usage_limit:
            raise ValidationError({"used_count": ["Coupon used more times than its limit"]})

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and self.discount_value > 100:
            raise ValidationError({"discount_value": ["Percentage discount cannot exceed 100"]})

    @classmethod
    def create(cls, code, discount_type, discount_value, expiry_date, **options):
        return cls(
            code=normalize_code(code),
            discount_type=discount_type,
            discount_value=discount_value,
            expiry_date=as_utc(expiry_date),
            created_at=datetime.now(UTC),
            **{name: value for name, value in options.items() if value is not None},
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        return as_utc(self.expiry_date) <= now

    def is_redeemable(self, now: datetime | None = None) -> bool:
        return bool(self.is_active) and not self.is_expired(now)

    @property
    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and self.used_count >= self.usage_limit

    def redeem(self):
        if self.is_exhausted:
            raise CouponUsageExceeded(self.code)
        self.used_count += 1

    def unredeem(self):
        if self.used_count > 0:
            self.used_count -= 1

    def discount_for(self, subtotal: float) -> float:
        if self.discount_type == DiscountType.PERCENTAGE.value:
            discount = subtotal * self.discount_value / 100
            if self.max_discount_amount is not None:
                discount = min(discount, self.max_discount_amount)
            return discount
        return min(self.discount_value, subtotal)

    def revise(self, **changes):
        for name, value in changes.items():
            if value is None:
                continue
            if name == "code":
                value = normalize_code(value)
            elif name == "expiry_date":
                value = as_utc(value)
            setattr(self, name, value)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "code": self.code,
            "discount_type": self.discount_type,
            "discount_value": self.discount_value,
            "min_order_amount": self.min_order_amount,
            "max_discount_amount": self.max_discount_amount,
            "expiry_date": as_utc(self.expiry_date).isoformat(),
            "is_active": self.is_active,
            "usage_limit": self.usage_limit,
            "used_count": self.used_count,
        }
