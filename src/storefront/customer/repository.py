"""Repository for the AddressBook aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.customer.address_book import AddressBook, AddressView
from storefront.domain import storefront


@storefront.repository(part_of=AddressBook)
class AddressBookRepository:
    def find(self, user_id) -> AddressBook | None:
        """Return the user's address book, or None if they never saved an address."""
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            return None

    def find_address(self, user_id, address_id) -> AddressView | None:
        """Return the address only when it exists and belongs to `user_id`."""
        book = self.find(user_id)
        if book is None:
            return None

        address = book.find(address_id)
        return book.view(address) if address is not None else None

    def addresses_for(self, user_id) -> list[AddressView]:
        """Primary address first, then newest first."""
        book = self.find(user_id)
        if book is None:
            return []

        views = sorted(
            (book.view(a) for a in book.addresses),
            key=lambda v: v.created_at.timestamp() if v.created_at else 0.0,
            reverse=True,
        )
        return sorted(views, key=lambda v: not v.is_primary)

    def primary_for(self, user_id) -> AddressView | None:
        book = self.find(user_id)
        if book is None:
            return None

        address = book.primary_address()
        return book.view(address) if address is not None else None
