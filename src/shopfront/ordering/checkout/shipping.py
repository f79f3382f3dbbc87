"""Shipping input — where the customer asked us to ship.

Checkout accepts either a saved address (by id) or a full address typed in
at checkout. Both are resolved once, up front, into the ``ShippingAddress``
value the order keeps.
"""

from dataclasses import dataclass, field

from protean.exceptions import ValidationError

from shopfront.errors import InvalidAddress, NotFoundError
from shopfront.identity.address.address import owned_address
from shopfront.ordering.order.order import ShippingAddress

_ADDRESS_FIELDS = ("full_name", "phone", "street", "city", "state", "postal_code", "country")


@dataclass(frozen=True)
class ByReference:
    address_id: str


@dataclass(frozen=True)
class Inline:
    fields: dict = field(default_factory=dict)


ShippingInput = ByReference | Inline


def shipping_input(address_id: str | None = None, address: dict | None = None) -> ShippingInput | None:
    """Build the variant from request fields; a saved address wins over inline fields."""
    if address_id:
        return ByReference(address_id)
    if address:
        return Inline(address)
    return None


def resolve_shipping(shipping: ShippingInput | None, user_id: str) -> ShippingAddress:
    if isinstance(shipping, ByReference):
        try:
            saved = owned_address(shipping.address_id, user_id)
        except NotFoundError:
            raise InvalidAddress(
                f"Address {shipping.address_id} does not exist", address_id=shipping.address_id
            ) from None
        return ShippingAddress(**{name: getattr(saved, name) for name in _ADDRESS_FIELDS})

    if isinstance(shipping, Inline):
        values = {name: shipping.fields.get(name) for name in _ADDRESS_FIELDS}
        try:
            return ShippingAddress(**values)
        except ValidationError as exc:
            raise InvalidAddress("Shipping address is incomplete", fields=exc.messages) from None

    raise InvalidAddress("A shipping address is required")
