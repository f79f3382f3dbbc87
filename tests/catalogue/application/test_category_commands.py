"""Application tests for category management and product filing."""

import pytest
from protean import current_domain
from shopfront.catalogue.category.category import Category
from shopfront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from shopfront.catalogue.product.creation import AddProduct
from shopfront.catalogue.product.details import UpdateProduct
from shopfront.catalogue.product.product import Product
from shopfront.errors import CategoryExists, CategoryInUse, CategoryNotFound


def _create(name="Kitchen", **options):
    return current_domain.process(CreateCategory(name=name, **options), asynchronous=False)


class TestCreateCategory:
    def test_create_persists_with_slug(self):
        category = current_domain.repository_for(Category).get(_create("Home & Living"))
        assert category.slug == "home-living"

    def test_names_are_unique(self):
        _create()
        with pytest.raises(CategoryExists):
            _create()


class TestUpdateCategory:
    def test_rename(self):
        category_id = _create()
        current_domain.process(UpdateCategory(category_id=category_id, name="Cookware"), asynchronous=False)
        assert current_domain.repository_for(Category).get(category_id).name == "Cookware"

    def test_rename_onto_another_name_conflicts(self):
        _create("Office")
        category_id = _create()
        with pytest.raises(CategoryExists):
            current_domain.process(UpdateCategory(category_id=category_id, name="Office"), asynchronous=False)

    def test_unknown_category(self):
        with pytest.raises(CategoryNotFound):
            current_domain.process(UpdateCategory(category_id="missing", name="X"), asynchronous=False)


class TestDeleteCategory:
    def test_delete_empty_category(self):
        category_id = _create()
        current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
        assert current_domain.repository_for(Category).get_or_none(category_id) is None

    def test_category_with_products_is_kept(self):
        category_id = _create()
        current_domain.process(AddProduct(name="Jar", price=50.0, category_id=category_id), asynchronous=False)

        with pytest.raises(CategoryInUse):
            current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
        assert current_domain.repository_for(Category).get(category_id) is not None


class TestProductFiling:
    def test_product_is_filed_under_category(self):
        category_id = _create()
        product_id = current_domain.process(
            AddProduct(name="Jar", price=50.0, category_id=category_id), asynchronous=False
        )
        assert current_domain.repository_for(Product).get(product_id).category_id == category_id

    def test_unknown_category_is_refused(self):
        with pytest.raises(CategoryNotFound):
            current_domain.process(AddProduct(name="Jar", price=50.0, category_id="missing"), asynchronous=False)

    def test_move_to_another_category(self):
        kitchen, office = _create(), _create("Office")
        product_id = current_domain.process(AddProduct(name="Jar", price=50.0, category_id=kitchen), asynchronous=False)

        current_domain.process(UpdateProduct(product_id=product_id, category_id=office), asynchronous=False)

        assert current_domain.repository_for(Product).get(product_id).category_id == office
