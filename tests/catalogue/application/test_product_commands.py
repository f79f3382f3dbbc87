"""Application tests for product commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from shopfront.catalogue.product.creation import AddProduct
from shopfront.catalogue.product.details import RemoveProduct, UpdateProduct
from shopfront.catalogue.product.product import Product
from shopfront.errors import ProductNotFound


def _add(**overrides):
    defaults = {"name": "Desk Lamp", "price": 1200.0, "discount": 5.0, "stock": 8}
    defaults.update(overrides)
    return current_domain.process(AddProduct(**defaults), asynchronous=False)


class TestAddProduct:
    def test_add_persists_with_final_price(self):
        product_id = _add()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.final_price == 1140.0
        assert product.stock == 8

    def test_add_with_images(self):
        product_id = _add(images=json.dumps(["lamp.jpg"]))
        assert current_domain.repository_for(Product).get(product_id).image_list == ["lamp.jpg"]


class TestUpdateProduct:
    def test_partial_update_keeps_other_fields(self):
        product_id = _add()
        current_domain.process(UpdateProduct(product_id=product_id, name="Floor Lamp"), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Floor Lamp"
        assert product.price == 1200.0

    def test_price_update_recomputes_final_price(self):
        product_id = _add()
        current_domain.process(UpdateProduct(product_id=product_id, price=1000.0, discount=10.0), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).final_price == 900.0

    def test_invalid_status_is_rejected(self):
        product_id = _add()
        with pytest.raises(ValidationError):
            current_domain.process(UpdateProduct(product_id=product_id, status="gone"), asynchronous=False)

    def test_unknown_product(self):
        with pytest.raises(ProductNotFound):
            current_domain.process(UpdateProduct(product_id="missing", name="X"), asynchronous=False)


class TestRemoveProduct:
    def test_remove(self):
        product_id = _add()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ProductNotFound):
            current_domain.repository_for(Product).find(product_id)
