"""Coupon validation — decides whether a code applies to a subtotal.

``quote`` has no side effects and backs the coupon preview endpoint. The
order workflow calls ``redeem`` once it commits to using the coupon, which
consumes one use through the repository's conditional update.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean.utils.globals import current_domain

from shopfront.errors import CouponNotFound, CouponUsageExceeded, MinimumOrderNotMet
from shopfront.ordering.coupon.coupon import Coupon, normalize_code


@dataclass(frozen=True)
class CouponQuote:
    coupon: Coupon
    subtotal: float
    discount: float

    @property
    def code(self) -> str:
        return self.coupon.code


class CouponValidator:
    def __init__(self, now: datetime | None = None):
        self.now = now or datetime.now(UTC)
        self.repository = current_domain.repository_for(Coupon)

    def quote(self, code: str, subtotal: float) -> CouponQuote:
        """Return the discount ``code`` grants on ``subtotal``, or raise why it does not apply."""
        coupon = self.repository.by_code(code)
        if coupon is None or not coupon.is_redeemable(self.now):
            raise CouponNotFound(normalize_code(code))
        if coupon.is_exhausted:
            raise CouponUsageExceeded(coupon.code)
        if subtotal < (coupon.min_order_amount or 0.0):
            raise MinimumOrderNotMet(coupon.code, coupon.min_order_amount)

        return CouponQuote(coupon=coupon, subtotal=subtotal, discount=coupon.discount_for(subtotal))

    def redeem(self, quote: CouponQuote) -> None:
        self.repository.redeem(quote.coupon)

    def release(self, quote: CouponQuote) -> None:
        self.repository.unredeem(quote.coupon.id)
