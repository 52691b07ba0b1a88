"""Domain events for the AddressBook aggregate."""

from protean.fields import Boolean, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="AddressBook")
class AddressAdded:
    """A new shipping address was added to a user's address book."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    full_name: String(required=True)
    country: String(required=True)
    city: String(required=True)
    is_primary: Boolean(default=False)


@storefront.event(part_of="AddressBook")
class PrimaryAddressChanged:
    """The checkout default moved to another address of the same user."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    previous_address_id: Identifier()
