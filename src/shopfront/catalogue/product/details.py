"""Product maintenance — partial updates and removal."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shopfront.catalogue.category.category import Category
from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    category_id: Identifier()
    price: Float(min_value=0.0)
    discount: Float()
    stock: Integer()
    status: String(max_length=20)
    images: Text()
    tags: Text()


@shopfront.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@shopfront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find(command.product_id)
        if command.category_id:
            current_domain.repository_for(Category).find(command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            images=json.loads(command.images) if command.images else None,
            tags=json.loads(command.tags) if command.tags else None,
        )
        product.update_pricing(price=command.price, discount=command.discount)
        if command.stock is not None:
            product.set_stock(command.stock)
        if command.status:
            product.change_status(command.status)

        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find(command.product_id)
        repo._dao.delete(product)
        logger.info("Product removed", product_id=product.id)
