"""Coupon repository — lookup by code and usage counting.

Redemption reloads the coupon, counts the use on the aggregate and saves it.
The save is conditional on the version that was loaded, so two checkouts
racing for the last use cannot both land: the loser's handler re-runs,
finds the coupon exhausted and fails with ``CouponUsageExceeded``.
"""

import structlog

from shopfront.domain import shopfront
from shopfront.ordering.coupon.coupon import Coupon, normalize_code

logger = structlog.get_logger(__name__)


@shopfront.repository(part_of=Coupon)
class CouponRepository:
    def by_code(self, code: str) -> Coupon | None:
        coupons = self._dao.query.filter(code=normalize_code(code)).all().items
        return coupons[0] if coupons else None

    def redeem(self, coupon: Coupon) -> None:
        """Consume one use of ``coupon``.

        ``coupon`` may be stale, so the limit is checked against a fresh read.
        """
        current = self.get(coupon.id)
        current.redeem()
        self.add(current)
        logger.info("Coupon redeemed", code=current.code, used_count=current.used_count)

    def unredeem(self, coupon_id: str) -> None:
        """Give back one use, for orders that failed after redeeming."""
        current = self.get(coupon_id)
        current.unredeem()
        self.add(current)
        logger.info("Coupon use returned", code=current.code, used_count=current.used_count)
