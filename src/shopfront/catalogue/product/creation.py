"""Product creation — command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shopfront.catalogue.category.category import Category
from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront


@shopfront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    discount: Float(default=0.0)
    stock: Integer(default=0)
    description: Text()
    category_id: Identifier()
    images: Text()  # JSON array
    tags: Text()  # JSON array


@shopfront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        if command.category_id:
            # Unknown categories surface as 404
            current_domain.repository_for(Category).find(command.category_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            discount=command.discount,
            stock=command.stock,
            description=command.description,
            category_id=command.category_id,
            images=json.loads(command.images) if command.images else None,
            tags=json.loads(command.tags) if command.tags else None,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
