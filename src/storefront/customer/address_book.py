"""AddressBook aggregate root with the Address entity.

A user's addresses form a single transactional boundary. The book keeps one
`primary_address_id` reference instead of a per-address flag, so "at most one
primary address per user" holds for every persisted version of the book:
moving the primary is one conditional update of the aggregate, never a
clear-then-set over several rows.
"""

from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, String

from storefront.domain import storefront
from storefront.exceptions import AddressNotFound, PrimaryInvariantViolation

# Stays below the row limit Protean applies when loading the addresses relation
MAX_ADDRESSES = 50


@dataclass(frozen=True)
class AddressView:
    """Read model of an address, with the derived primary flag."""

    address_id: str
    user_id: str
    full_name: str
    country: str
    street: str
    unit: str | None
    city: str
    state: str
    zip_code: str
    phone: str
    is_primary: bool
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@storefront.entity(part_of="AddressBook")
class Address:
    """A shipping destination in a user's address book."""

    full_name: String(required=True, max_length=150)
    country: String(required=True, max_length=100)
    street: String(required=True, max_length=255)
    unit: String(max_length=50)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    zip_code: String(required=True, max_length=20)
    phone: String(required=True, max_length=30)
    created_at: DateTime()


@storefront.aggregate
class AddressBook:
    """All addresses of one user, identified by the user's id.

    A book holds up to MAX_ADDRESSES addresses. The first address added
    becomes the primary one. Afterwards the primary reference only moves when
    explicitly requested.
    """

    user_id: Identifier(identifier=True, required=True)
    addresses: HasMany(Address)
    primary_address_id: Identifier()
    created_at: DateTime()

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @invariant.post
    def primary_address_must_belong_to_book(self):
        if self.primary_address_id is None:
            return
        if not any(str(a.id) == str(self.primary_address_id) for a in self.addresses):
            raise ValidationError({"primary_address_id": ["Primary address must be one of the user's addresses"]})

    @classmethod
    def open(cls, user_id):
        return cls(user_id=user_id, created_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def find(self, address_id):
        """Return the address with the given id, or None."""
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    def is_primary(self, address) -> bool:
        return self.primary_address_id is not None and str(address.id) == str(self.primary_address_id)

    def primary_address(self):
        """Return the checkout default address, or None when the book is empty."""
        if self.primary_address_id is None:
            return None

        matches = [a for a in self.addresses if self.is_primary(a)]
        if len(matches) != 1:
            raise PrimaryInvariantViolation(
                f"User {self.user_id} has {len(matches)} addresses matching primary {self.primary_address_id}"
            )
        return matches[0]

    def view(self, address) -> AddressView:
        return AddressView(
            address_id=str(address.id),
            user_id=str(self.user_id),
            full_name=address.full_name,
            country=address.country,
            street=address.street,
            unit=address.unit,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            phone=address.phone,
            is_primary=self.is_primary(address),
            created_at=address.created_at,
        )

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_address(
        self,
        full_name,
        country,
        street,
        city,
        state,
        zip_code,
        phone,
        unit=None,
        is_primary=False,
    ):
        from storefront.customer.events import AddressAdded

        # First address is always primary
        if not self.addresses:
            is_primary = True

        previous_primary_id = self.primary_address_id

        with atomic_change(self):
            address = Address(
                full_name=full_name,
                country=country,
                street=street,
                unit=unit,
                city=city,
                state=state,
                zip_code=zip_code,
                phone=phone,
                created_at=datetime.now(UTC),
            )
            self.add_addresses(address)

            if is_primary:
                self.primary_address_id = address.id

        self.raise_(
            AddressAdded(
                user_id=self.user_id,
                address_id=address.id,
                full_name=full_name,
                country=country,
                city=city,
                is_primary=bool(is_primary),
            )
        )
        if is_primary and previous_primary_id is not None:
            self._raise_primary_changed(address.id, previous_primary_id)

        return address

    def set_primary_address(self, address_id):
        address = self.find(address_id)
        if address is None:
            raise AddressNotFound({"address_id": [f"Address {address_id} not found for this user"]})

        previous_primary_id = self.primary_address_id
        if previous_primary_id is not None and str(previous_primary_id) == str(address.id):
            return address

        self.primary_address_id = address.id
        self._raise_primary_changed(address.id, previous_primary_id)
        return address

    def _raise_primary_changed(self, address_id, previous_address_id):
        from storefront.customer.events import PrimaryAddressChanged

        self.raise_(
            PrimaryAddressChanged(
                user_id=self.user_id,
                address_id=address_id,
                previous_address_id=previous_address_id,
            )
        )
