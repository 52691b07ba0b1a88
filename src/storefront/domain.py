"""Storefront bounded context — address book and order placement.

Owns the primary-address invariant of each user's address book and the
order-placement unit of work that turns priced cart lines into an Order.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
