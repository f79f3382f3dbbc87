"""Shared BDD fixtures and step definitions for the Ordering context."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when
from shopfront.catalogue.product.product import Product
from shopfront.errors import ShopfrontError
from shopfront.ordering.cart.cart import Cart
from shopfront.ordering.order.order import Order


@pytest.fixture()
def catalog():
    """Products created by the scenario, by name."""
    return {}


@pytest.fixture()
def outcome():
    return {"order": None, "error": None}


def _attempt(action) -> dict:
    try:
        return {"order": action(), "error": None}
    except ShopfrontError as exc:
        return {"order": None, "error": exc}


@pytest.fixture()
def attempt():
    """Run a step action, capturing a rejection instead of raising it."""
    return _attempt


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def _(catalog, make_product, name, price, stock):
    catalog[name] = make_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('"{user_id}" has {quantity:d} of "{name}" in the cart'))
def _(catalog, fill_cart, user_id, quantity, name):
    fill_cart(user_id, (catalog[name], quantity))


@given(parsers.cfparse('the stock of "{name}" drops to {stock:d}'))
def _(catalog, name, stock):
    product = current_domain.repository_for(Product).get(catalog[name].id)
    product.set_stock(stock)
    current_domain.repository_for(Product).add(product)


@given(parsers.cfparse('"{user_id}" placed an order'), target_fixture="outcome")
def _(place_order, user_id):
    return {"order": place_order(user_id), "error": None}


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{user_id}" places an order'), target_fixture="outcome")
def _(place_order, user_id):
    return _attempt(lambda: place_order(user_id))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _(catalog, name, stock):
    assert current_domain.repository_for(Product).get(catalog[name].id).stock == stock


@then(parsers.cfparse('the cart of "{user_id}" is empty'))
def _(user_id):
    assert current_domain.repository_for(Cart).for_user(user_id).is_empty


@then(parsers.cfparse('the cart of "{user_id}" holds {quantity:d} of "{name}"'))
def _(catalog, user_id, quantity, name):
    cart = current_domain.repository_for(Cart).for_user(user_id)
    assert cart.quantity_of(catalog[name].id) == quantity


@then(parsers.cfparse('the order is rejected with "{code}"'))
def _(outcome, code):
    assert outcome["order"] is None
    assert outcome["error"].code == code


@then(parsers.cfparse('the order status is "{status}"'))
def _(outcome, status):
    order = current_domain.repository_for(Order).get(outcome["order"].id)
    assert order.status == status
