"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from shopfront.domain import shopfront


@shopfront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    final_price: Float(required=True)
    stock: Integer(required=True)
    added_at: DateTime(required=True)


@shopfront.event(part_of="Product")
class ProductPriceChanged:
    """Price or discount changed; the final price was recomputed."""

    __version__ = 1

    product_id: Identifier(required=True)
    price: Float(required=True)
    discount: Float(required=True)
    previous_final_price: Float()
    final_price: Float(required=True)
