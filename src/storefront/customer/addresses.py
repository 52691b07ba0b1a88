"""Address book management — commands, handler and queries."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.address_book import AddressBook, AddressView
from storefront.domain import storefront
from storefront.exceptions import AddressNotFound


@storefront.command(part_of="AddressBook")
class AddAddress:
    """Add a shipping address, optionally making it the checkout default."""

    user_id: Identifier(required=True)
    full_name: String(required=True, max_length=150)
    country: String(required=True, max_length=100)
    street: String(required=True, max_length=255)
    unit: String(max_length=50)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    zip_code: String(required=True, max_length=20)
    phone: String(required=True, max_length=30)
    is_primary: Boolean(default=False)


@storefront.command(part_of="AddressBook")
class SetPrimaryAddress:
    """Make an existing address the user's checkout default."""

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command_handler(part_of=AddressBook)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = repo.find(command.user_id) or AddressBook.open(command.user_id)

        address = book.add_address(
            full_name=command.full_name,
            country=command.country,
            street=command.street,
            unit=command.unit,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            phone=command.phone,
            is_primary=bool(command.is_primary),
        )
        repo.add(book)
        return str(address.id)

    @handle(SetPrimaryAddress)
    def set_primary_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = repo.find(command.user_id)
        if book is None:
            raise AddressNotFound({"address_id": [f"Address {command.address_id} not found for this user"]})

        book.set_primary_address(command.address_id)
        repo.add(book)


def list_addresses(user_id) -> list[AddressView]:
    """All addresses of a user, primary first, then newest first."""
    return current_domain.repository_for(AddressBook).addresses_for(user_id)


def primary_address_for(user_id) -> AddressView | None:
    """The address checkout preselects, or None."""
    return current_domain.repository_for(AddressBook).primary_for(user_id)
