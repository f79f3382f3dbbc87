"""Cart aggregate — the one active cart a user fills before checkout.

A cart is created lazily on the first add and is emptied, never deleted,
once an order has been placed from it.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from shopfront.domain import shopfront


@shopfront.entity(part_of="Cart")
class CartItem:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    added_at: DateTime()


@shopfront.aggregate
class Cart:
    user_id: Identifier(required=True)
    items: HasMany(CartItem)
    updated_at: DateTime()

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, updated_at=datetime.now(UTC))

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def quantity_of(self, product_id) -> int:
        line = self.line_for(product_id)
        return line.quantity if line else 0

    def add_item(self, product_id, quantity):
        """Add a product, or raise the quantity of the line already holding it."""
        from shopfront.ordering.cart.events import CartItemAdded

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity, added_at=now))
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                quantity=self.quantity_of(product_id),
            )
        )

    def update_quantity(self, product_id, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

    def remove_item(self, product_id):
        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        self.remove_items(line)
        self.updated_at = datetime.now(UTC)

    def clear(self):
        for line in list(self.items):
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

    @property
    def is_empty(self) -> bool:
        return not self.items
