"""Category repository — lookups by id and by name."""

from protean.exceptions import ObjectNotFoundError

from shopfront.catalogue.category.category import Category
from shopfront.domain import shopfront
from shopfront.errors import CategoryNotFound


@shopfront.repository(part_of=Category)
class CategoryRepository:
    def find(self, category_id: str) -> Category:
        try:
            return self.get(category_id)
        except ObjectNotFoundError:
            raise CategoryNotFound(category_id) from None

    def by_name(self, name: str) -> Category | None:
        matches = self._dao.query.filter(name=name).all().items
        return matches[0] if matches else None

    def everything(self) -> list[Category]:
        return self._dao.query.order_by("name").all().items
