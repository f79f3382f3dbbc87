"""Product aggregate — catalog entry with price, discount, stock and rating.

The final price is derived from price and discount and is recomputed in the
same change whenever either of them moves. Stock never goes below zero:
taking more than is on hand raises ``InsufficientStock``.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from shopfront.domain import shopfront
from shopfront.errors import InsufficientStock


class ProductStatus(Enum):
    AVAILABLE = "available"
    OUT_OF_STOCK = "out-of-stock"
    DISCONTINUED = "discontinued"


def compute_final_price(price: float, discount: float) -> float:
    """Price after the product's own percentage discount."""
    return price - price * (discount or 0.0) / 100


@shopfront.aggregate
class Product:
    name: String(required=True, max_length=255)
    description: Text()
    category_id: Identifier()
    price: Float(required=True, min_value=0.0)
    discount: Float(default=0.0, min_value=0.0, max_value=100.0)
    final_price: Float(min_value=0.0)
    stock: Integer(default=0, min_value=0)
    status: String(choices=ProductStatus, default=ProductStatus.AVAILABLE.value)
    images: Text()  # JSON array of URLs
    tags: Text()  # JSON array of strings
    avg_rating: Float(default=0.0)
    rating_count: Integer(default=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def final_price_must_reflect_discount(self):
        if self.price is None:
            return
        expected = compute_final_price(self.price, self.discount)
        if self.final_price is None or abs(self.final_price - expected) > 1e-9:
            raise ValidationError({"final_price": ["Final price must equal price less discount"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        discount=0.0,
        stock=0,
        description=None,
        category_id=None,
        images=None,
        tags=None,
    ):
        from shopfront.catalogue.product.events import ProductAdded

        now = datetime.now(UTC)
        discount = discount or 0.0
        product = cls(
            name=name,
            description=description,
            category_id=category_id,
            price=price,
            discount=discount,
            final_price=compute_final_price(price, discount),
            stock=stock or 0,
            images=json.dumps(images or []),
            tags=json.dumps(tags or []),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                price=product.price,
                final_price=product.final_price,
                stock=product.stock,
                added_at=now,
            )
        )
        return product

    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def tag_list(self) -> list[str]:
        return json.loads(self.tags) if self.tags else []

    def update_details(self, name=None, description=None, category_id=None, images=None, tags=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if category_id is not None:
            self.category_id = category_id
        if images is not None:
            self.images = json.dumps(images)
        if tags is not None:
            self.tags = json.dumps(tags)
        self.updated_at = datetime.now(UTC)

    def update_pricing(self, price=None, discount=None):
        """Change price and/or discount, recomputing the final price."""
        from shopfront.catalogue.product.events import ProductPriceChanged

        if price is None and discount is None:
            return

        previous = self.final_price
        with atomic_change(self):
            if price is not None:
                self.price = price
            if discount is not None:
                self.discount = discount
            self.final_price = compute_final_price(self.price, self.discount)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                price=self.price,
                discount=self.discount,
                previous_final_price=previous,
                final_price=self.final_price,
            )
        )

    def set_stock(self, stock):
        if stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})
        self.stock = stock
        self.updated_at = datetime.now(UTC)

    def take_stock(self, quantity: int):
        if quantity > self.stock:
            raise InsufficientStock(str(self.id), self.name, self.stock, quantity)
        self.stock -= quantity
        self.updated_at = datetime.now(UTC)

    def return_stock(self, quantity: int):
        self.stock += quantity
        self.updated_at = datetime.now(UTC)

    def record_rating(self, avg_rating: float, rating_count: int):
        self.avg_rating = avg_rating
        self.rating_count = rating_count

    def change_status(self, status):
        try:
            self.status = ProductStatus(status).value
        except ValueError:
            raise ValidationError({"status": [f"Unknown product status {status}"]}) from None
        self.updated_at = datetime.now(UTC)

    @property
    def is_purchasable(self) -> bool:
        return self.status != ProductStatus.DISCONTINUED.value

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "category_id": str(self.category_id) if self.category_id else None,
            "price": self.price,
            "discount": self.discount,
            "final_price": self.final_price,
            "stock": self.stock,
            "status": self.status,
            "images": self.image_list,
            "tags": self.tag_list,
            "avg_rating": self.avg_rating,
            "rating_count": self.rating_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
