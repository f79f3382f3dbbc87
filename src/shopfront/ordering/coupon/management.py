"""Coupon administration — create, revise and delete coupons."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.errors import ConflictError, NotFoundError
from shopfront.ordering.coupon.coupon import Coupon, normalize_code

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Coupon")
class CreateCoupon:
    code: String(required=True, max_length=50)
    discount_type: String(required=True, max_length=20)
    discount_value: Float(required=True, min_value=0.0)
    min_order_amount: Float(min_value=0.0)
    max_discount_amount: Float(min_value=0.0)
    expiry_date: DateTime(required=True)
    is_active: Boolean()
    usage_limit: Integer(min_value=1)


@shopfront.command(part_of="Coupon")
class ReviseCoupon:
    coupon_id: Identifier(required=True)
    code: String(max_length=50)
    discount_type: String(max_length=20)
    discount_value: Float(min_value=0.0)
    min_order_amount: Float(min_value=0.0)
    max_discount_amount: Float(min_value=0.0)
    expiry_date: DateTime()
    is_active: Boolean()
    usage_limit: Integer(min_value=1)


@shopfront.command(part_of="Coupon")
class DeleteCoupon:
    coupon_id: Identifier(required=True)


def load_coupon(coupon_id: str) -> Coupon:
    try:
        return current_domain.repository_for(Coupon).get(coupon_id)
    except ObjectNotFoundError:
        raise NotFoundError(f"Coupon {coupon_id} not found", coupon_id=coupon_id) from None


_OPTIONS = ("min_order_amount", "max_discount_amount", "is_active", "usage_limit")


@shopfront.command_handler(part_of=Coupon)
class CouponAdministrationHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        if repo.by_code(command.code) is not None:
            raise ConflictError("Coupon code already exists", coupon_code=normalize_code(command.code))

        coupon = Coupon.create(
            code=command.code,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            expiry_date=command.expiry_date,
            **{name: getattr(command, name) for name in _OPTIONS},
        )
        repo.add(coupon)
        logger.info("Coupon created", code=coupon.code)
        return str(coupon.id)

    @handle(ReviseCoupon)
    def revise_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = load_coupon(command.coupon_id)

        if command.code and normalize_code(command.code) != coupon.code:
            clash = repo.by_code(command.code)
            if clash is not None:
                raise ConflictError("Coupon code already exists", coupon_code=clash.code)

        coupon.revise(
            code=command.code,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            expiry_date=command.expiry_date,
            **{name: getattr(command, name) for name in _OPTIONS},
        )
        repo.add(coupon)

    @handle(DeleteCoupon)
    def delete_coupon(self, command):
        coupon = load_coupon(command.coupon_id)
        current_domain.repository_for(Coupon)._dao.delete(coupon)
        logger.info("Coupon deleted", code=coupon.code)
