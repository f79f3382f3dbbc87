"""Order repository — lookups by id, by customer and by status.

Status writes go through ``add``, which only lands if the order still has
the version that was loaded. Of a cancellation and a fulfilment update
racing on the same order, one commits first; the other handler re-runs on
the fresh order and either sees it cancelled or fails with
``InvalidTransition``.
"""

from protean.exceptions import ObjectNotFoundError

from shopfront.domain import shopfront
from shopfront.errors import OrderNotFound
from shopfront.ordering.order.order import Order


@shopfront.repository(part_of=Order)
class OrderRepository:
    def find(self, order_id: str) -> Order:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(order_id) from None

    def for_user(self, user_id: str) -> list[Order]:
        return self._dao.query.filter(user_id=user_id).order_by("-placed_at").all().items

    def everything(self, status: str | None = None) -> list[Order]:
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-placed_at").all().items

    def paid_orders_of(self, user_id: str) -> list[Order]:
        return self._dao.query.filter(user_id=user_id, is_paid=True).all().items

