"""Category management — admin commands and their handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from shopfront.catalogue.category.category import Category
from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront
from shopfront.errors import CategoryExists, CategoryInUse

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()
    image_url: String(max_length=500)


@shopfront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    slug: String(max_length=120)
    description: Text()
    image_url: String(max_length=500)


@shopfront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@shopfront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.by_name(command.name) is not None:
            raise CategoryExists(command.name)

        category = Category.create(
            name=command.name,
            description=command.description,
            slug=command.slug,
            image_url=command.image_url,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.find(command.category_id)

        if command.name and command.name != category.name:
            if repo.by_name(command.name) is not None:
                raise CategoryExists(command.name)

        category.update_details(
            name=command.name,
            description=command.description,
            slug=command.slug,
            image_url=command.image_url,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.find(command.category_id)

        filed = current_domain.repository_for(Product).search(category_id=category.id)
        if filed:
            raise CategoryInUse(str(category.id), len(filed))

        repo._dao.delete(category)
        logger.info("Category removed", category_id=category.id, name=category.name)
