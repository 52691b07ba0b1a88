"""Address validation for checkout."""

import structlog
from protean.utils.globals import current_domain

from storefront.customer.address_book import AddressBook, AddressView
from storefront.exceptions import AddressNotFound

logger = structlog.get_logger(__name__)


def validate_address(user_id, address_id) -> AddressView:
    """Return the address if `address_id` exists and is owned by `user_id`.

    Raises `AddressNotFound` otherwise, including when the address exists
    but belongs to a different user.
    """
    address = current_domain.repository_for(AddressBook).find_address(user_id, address_id)
    if address is None:
        logger.info("Address not found for user", user_id=str(user_id), address_id=str(address_id))
        raise AddressNotFound({"address_id": ["Address not found for this user"]})
    return address
