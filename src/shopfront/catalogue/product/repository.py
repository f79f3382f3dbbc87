"""Product repository — catalog queries and stock adjustments.

Stock is contended across concurrent checkouts. Every adjustment loads the
product, changes it through the aggregate and saves it back, and the save
only lands if the row still carries the version that was loaded. A checkout
that loses the race gets ``ExpectedVersionError``; the command handler
re-runs it against fresh state, where the stock check is made again.

``reserve`` takes lines one product at a time. If a later line fails, the
lines already taken are given back before the error propagates, but the
intermediate decrements are hidden from other readers only by the unit of
work's transaction. Called outside a unit of work, on a provider that
commits each save on its own, another reader can briefly see the partially
reduced stock.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError

from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront
from shopfront.errors import ProductNotFound

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockLine:
    """One product and the quantity to take from, or return to, its stock."""

    product_id: str
    quantity: int


@shopfront.repository(part_of=Product)
class ProductRepository:
    def find(self, product_id: str) -> Product:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFound(product_id) from None

    def search(self, category_id=None, status=None, q=None) -> list[Product]:
        query = self._dao.query
        if category_id:
            query = query.filter(category_id=category_id)
        if status:
            query = query.filter(status=status)

        products = query.order_by("-created_at").all().items
        if q:
            needle = q.lower()
            products = [p for p in products if needle in p.name.lower()]
        return products

    # -------------------------------------------------------------------
    # Stock reservation
    # -------------------------------------------------------------------
    def reserve(self, lines: list[StockLine]) -> list[StockLine]:
        """Take stock for every line, or for none of them.

        Lines are taken in the given order. When one cannot be satisfied the
        lines already taken are returned before the error propagates, so
        the failing call leaves every product's stock as it found it. Other
        readers are kept from seeing the partial decrements only when the
        call runs inside a unit of work, as it does from a command handler.
        """
        taken: list[StockLine] = []
        try:
            for line in lines:
                self._take(line)
                taken.append(line)
        except Exception:
            if taken:
                logger.info(
                    "Rolling back partial stock reservation",
                    product_ids=[line.product_id for line in taken],
                )
                self.release(taken)
            raise
        return taken

    def release(self, lines: list[StockLine]) -> None:
        """Return stock for every line (the inverse of ``reserve``)."""
        for line in lines:
            product = self.find(line.product_id)
            product.return_stock(line.quantity)
            self.add(product)
            logger.debug("Stock released", product_id=product.id, quantity=line.quantity)

    def _take(self, line: StockLine) -> None:
        product = self.find(line.product_id)
        product.take_stock(line.quantity)
        self.add(product)
        logger.debug(
            "Stock reserved",
            product_id=product.id,
            quantity=line.quantity,
            remaining=product.stock,
        )

    # -------------------------------------------------------------------
    # Ratings
    # -------------------------------------------------------------------
    def record_rating(self, product_id: str, avg_rating: float, rating_count: int) -> None:
        product = self.find(product_id)
        product.record_rating(avg_rating, rating_count)
        self.add(product)
