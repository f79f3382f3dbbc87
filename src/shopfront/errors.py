"""Error taxonomy for the shopfront domain.

Every error carries the HTTP status it maps to at the API boundary and a
stable machine-readable ``code``. Field-level input validation keeps using
``protean.exceptions.ValidationError``; the classes here cover business
rejections that are not tied to a single field.
"""


class ShopfrontError(Exception):
    """Base exception for all shopfront errors."""

    status_code = 500
    code = "unexpected_error"

    def __init__(self, message: str, **context):
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message, **self.context}


class BadRequestError(ShopfrontError):
    status_code = 400
    code = "bad_request"


class NotFoundError(ShopfrontError):
    status_code = 404
    code = "not_found"


class ConflictError(ShopfrontError):
    status_code = 409
    code = "conflict"


class AuthError(ShopfrontError):
    """The caller could not be identified."""

    status_code = 401
    code = "unauthorized"


class ForbiddenError(AuthError):
    """The caller is known but may not perform the operation."""

    status_code = 403
    code = "forbidden"


class UnexpectedError(ShopfrontError):
    status_code = 500
    code = "unexpected_error"


# ---------------------------------------------------------------------------
# 400
# ---------------------------------------------------------------------------
class EmptyCart(BadRequestError):
    code = "empty_cart"

    def __init__(self, user_id: str):
        super().__init__("Cart is empty", user_id=user_id)


class InvalidAddress(BadRequestError):
    code = "invalid_address"


class MinimumOrderNotMet(BadRequestError):
    code = "minimum_order_not_met"

    def __init__(self, code: str, minimum: float):
        super().__init__(f"Minimum order amount is {minimum:.2f}", coupon_code=code, minimum=minimum)


class SignatureMismatch(BadRequestError):
    code = "signature_mismatch"

    def __init__(self, order_id: str):
        super().__init__("Invalid signature", order_id=order_id)


class CategoryInUse(BadRequestError):
    code = "category_in_use"

    def __init__(self, category_id: str, product_count: int):
        super().__init__(
            "Cannot delete category with existing products. Remove its products first.",
            category_id=category_id,
            product_count=product_count,
        )


# ---------------------------------------------------------------------------
# 404
# ---------------------------------------------------------------------------
class ProductNotFound(NotFoundError):
    code = "product_not_found"

    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} not found", product_id=product_id)


class CategoryNotFound(NotFoundError):
    code = "category_not_found"

    def __init__(self, category_id: str):
        super().__init__(f"Category {category_id} not found", category_id=category_id)


class CouponNotFound(NotFoundError):
    code = "coupon_not_found"

    def __init__(self, code: str):
        super().__init__("Coupon is invalid or expired", coupon_code=code)


class OrderNotFound(NotFoundError):
    code = "order_not_found"

    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} not found", order_id=order_id)


# ---------------------------------------------------------------------------
# 409
# ---------------------------------------------------------------------------
class InsufficientStock(ConflictError):
    code = "insufficient_stock"

    def __init__(self, product_id: str, name: str, available: int, requested: int):
        self.product_id = product_id
        super().__init__(
            f"Insufficient stock for {name}: {available} available, {requested} requested",
            product_id=product_id,
            available=available,
            requested=requested,
        )


class CategoryExists(ConflictError):
    code = "category_exists"

    def __init__(self, name: str):
        super().__init__(f"Category {name} already exists", name=name)


class CouponUsageExceeded(ConflictError):
    code = "coupon_usage_exceeded"

    def __init__(self, code: str):
        super().__init__("Coupon usage limit exceeded", coupon_code=code)


class InvalidTransition(ConflictError):
    code = "invalid_transition"

    def __init__(self, order_id: str, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot transition from {current} to {target}",
            order_id=order_id,
            current_status=current,
            target_status=target,
        )
