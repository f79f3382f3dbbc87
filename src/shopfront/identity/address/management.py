"""Address book commands — add, revise, remove and choose the default."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.identity.address.address import Address, addresses_of, new_address, owned_address

logger = structlog.get_logger(__name__)


@shopfront.command(part_of="Address")
class AddAddress:
    user_id: Identifier(required=True)
    full_name: String(required=True, max_length=100)
    phone: String(max_length=20)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)


@shopfront.command(part_of="Address")
class ReviseAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    full_name: String(max_length=100)
    phone: String(max_length=20)
    street: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=100)
    postal_code: String(max_length=20)
    country: String(max_length=100)


@shopfront.command(part_of="Address")
class RemoveAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@shopfront.command(part_of="Address")
class MakeDefaultAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


_FIELDS = ("full_name", "phone", "street", "city", "state", "postal_code", "country")


@shopfront.command_handler(part_of=Address)
class AddressBookHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(Address)
        is_first = not addresses_of(command.user_id)

        address = new_address(
            command.user_id,
            is_default=is_first,
            **{name: getattr(command, name) for name in _FIELDS},
        )
        repo.add(address)
        return str(address.id)

    @handle(ReviseAddress)
    def revise_address(self, command):
        address = owned_address(command.address_id, command.user_id)
        address.revise(**{name: getattr(command, name) for name in _FIELDS})
        current_domain.repository_for(Address).add(address)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(Address)
        address = owned_address(command.address_id, command.user_id)
        repo._dao.delete(address)

        if address.is_default:
            remaining = [a for a in addresses_of(command.user_id) if a.id != address.id]
            if remaining:
                successor = remaining[0]
                successor.is_default = True
                repo.add(successor)
                logger.info("Default address reassigned", user_id=command.user_id, address_id=successor.id)

    @handle(MakeDefaultAddress)
    def make_default(self, command):
        repo = current_domain.repository_for(Address)
        address = owned_address(command.address_id, command.user_id)

        for other in addresses_of(command.user_id):
            if other.is_default and other.id != address.id:
                other.is_default = False
                repo.add(other)
        address.is_default = True
        repo.add(address)
