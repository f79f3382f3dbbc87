"""Saved address aggregate — a user's delivery address book.

Orders never point at these records. Checkout copies the chosen address
into the order, so editing or deleting an address leaves past orders as
they were.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.errors import NotFoundError


@shopfront.aggregate
class Address:
    user_id: Identifier(required=True)
    full_name: String(required=True, max_length=100)
    phone: String(max_length=20)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)
    created_at: DateTime()

    def revise(self, **fields):
        for name, value in fields.items():
            if value is not None:
                setattr(self, name, value)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "phone": self.phone,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "is_default": self.is_default,
        }


def addresses_of(user_id: str) -> list[Address]:
    repo = current_domain.repository_for(Address)
    return repo._dao.query.filter(user_id=user_id).order_by("created_at").all().items


def owned_address(address_id: str, user_id: str) -> Address:
    """Load an address, hiding addresses that belong to someone else."""
    try:
        address = current_domain.repository_for(Address).get(address_id)
    except ObjectNotFoundError:
        address = None
    if address is None or address.user_id != user_id:
        raise NotFoundError(f"Address {address_id} not found", address_id=address_id)
    return address


def new_address(user_id: str, **fields) -> Address:
    return Address(user_id=user_id, created_at=datetime.now(UTC), **fields)
