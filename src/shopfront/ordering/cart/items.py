"""Cart item management — commands and handler.

Adding checks the catalog first: the product must exist, must still be on
sale, and must have stock for the line's resulting quantity. Stock is only
checked here, not held; it is reserved when the order is placed.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from shopfront.catalogue.product.product import Product
from shopfront.domain import shopfront
from shopfront.errors import InsufficientStock
from shopfront.ordering.cart.cart import Cart


@shopfront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@shopfront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@shopfront.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopfront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def _check_availability(product: Product, quantity: int) -> None:
    if not product.is_purchasable:
        raise ValidationError({"product_id": [f"{product.name} is no longer sold"]})
    if product.stock < quantity:
        raise InsufficientStock(product.id, product.name, product.stock, quantity)


@shopfront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        product = current_domain.repository_for(Product).find(command.product_id)
        cart = repo.for_user_or_new(command.user_id)

        _check_availability(product, cart.quantity_of(product.id) + command.quantity)

        cart.add_item(product_id=product.id, quantity=command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        product = current_domain.repository_for(Product).find(command.product_id)
        cart = repo.for_user_or_new(command.user_id)

        _check_availability(product, command.quantity)

        cart.update_quantity(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user_or_new(command.user_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is not None:
            cart.clear()
            repo.add(cart)
