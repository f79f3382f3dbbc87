"""Application tests for cart commands."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from shopfront.errors import InsufficientStock, ProductNotFound
from shopfront.ordering.cart.cart import Cart
from shopfront.ordering.cart.items import AddToCart, ClearCart, RemoveCartItem, UpdateCartItem

USER = "user-cart"


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _cart():
    return current_domain.repository_for(Cart).for_user(USER)


class TestAddToCart:
    def test_first_add_creates_cart(self, make_product):
        product = make_product()
        _process(AddToCart(user_id=USER, product_id=product.id, quantity=2))
        assert _cart().quantity_of(product.id) == 2

    def test_repeat_add_increments(self, make_product):
        product = make_product(stock=5)
        _process(AddToCart(user_id=USER, product_id=product.id, quantity=2))
        _process(AddToCart(user_id=USER, product_id=product.id, quantity=3))
        assert _cart().quantity_of(product.id) == 5

    def test_resulting_quantity_must_fit_stock(self, make_product):
        product = make_product(stock=3)
        _process(AddToCart(user_id=USER, product_id=product.id, quantity=2))
        with pytest.raises(InsufficientStock):
            _process(AddToCart(user_id=USER, product_id=product.id, quantity=2))
        assert _cart().quantity_of(product.id) == 2

    def test_discontinued_product_is_rejected(self, make_product):
        product = make_product()
        product.change_status("discontinued")
        current_domain.repository_for(type(product)).add(product)

        with pytest.raises(ValidationError):
            _process(AddToCart(user_id=USER, product_id=product.id, quantity=1))

    def test_unknown_product(self):
        with pytest.raises(ProductNotFound):
            _process(AddToCart(user_id=USER, product_id="missing", quantity=1))


class TestChangeCart:
    def test_update_remove_and_clear(self, make_product):
        a = make_product(name="A")
        b = make_product(name="B")
        _process(AddToCart(user_id=USER, product_id=a.id, quantity=1))
        _process(AddToCart(user_id=USER, product_id=b.id, quantity=1))

        _process(UpdateCartItem(user_id=USER, product_id=a.id, quantity=4))
        assert _cart().quantity_of(a.id) == 4

        _process(RemoveCartItem(user_id=USER, product_id=b.id))
        assert _cart().quantity_of(b.id) == 0

        _process(ClearCart(user_id=USER))
        assert _cart().is_empty

    def test_update_beyond_stock_is_rejected(self, make_product):
        product = make_product(stock=2)
        _process(AddToCart(user_id=USER, product_id=product.id, quantity=1))
        with pytest.raises(InsufficientStock):
            _process(UpdateCartItem(user_id=USER, product_id=product.id, quantity=3))
