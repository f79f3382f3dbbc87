"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from shopfront.domain import shopfront


@shopfront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to a cart; ``quantity`` is the line's new total."""

    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
