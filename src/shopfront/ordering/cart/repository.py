"""Cart repository — carts are addressed by their owner."""

from shopfront.domain import shopfront
from shopfront.ordering.cart.cart import Cart


@shopfront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id: str) -> Cart | None:
        carts = self._dao.query.filter(user_id=user_id).all().items
        return carts[0] if carts else None

    def for_user_or_new(self, user_id: str) -> Cart:
        return self.for_user(user_id) or Cart.create(user_id)
