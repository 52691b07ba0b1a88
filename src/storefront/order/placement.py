"""Order placement — the checkout unit of work.

`place_order` is the boundary operation. It rejects incomplete requests
before anything reaches the store, then dispatches `PlaceOrder`, whose
handler runs inside a single UnitOfWork:

    validate address -> normalize lines -> compute total
    -> build Order + OrderItems -> persist -> commit

Any exception raised inside the handler rolls the whole unit of work back,
so a failed attempt never leaves an Order or an OrderItem behind.
"""

import json
from collections.abc import Sequence
from dataclasses import asdict, dataclass

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.customer.validation import validate_address
from storefront.domain import storefront
from storefront.exceptions import InvalidRequest, PersistenceFailure
from storefront.order.order import Order
from storefront.order.pricing import normalize_lines, order_total

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderConfirmation:
    order_id: str
    total: float

    def to_dict(self) -> dict:
        return asdict(self)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Place an order for a user's cart lines, shipped to one of their addresses."""

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    items: Text(required=True)  # JSON: list of raw cart line dicts
    payment_id: String(max_length=255)
    tracking_number: String(max_length=255)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        validate_address(command.user_id, command.address_id)

        raw_items = json.loads(command.items) if isinstance(command.items, str) else command.items
        lines = normalize_lines(raw_items)
        total = order_total(lines)

        order = Order.place(
            user_id=command.user_id,
            address_id=command.address_id,
            lines=lines,
            total=total,
            payment_id=command.payment_id,
            tracking_number=command.tracking_number,
        )
        current_domain.repository_for(Order).add(order)

        return OrderConfirmation(order_id=str(order.id), total=float(total))


def _is_missing(value) -> bool:
    return value is None or not str(value).strip()


def _reject_invalid_request(user_id, address_id, items) -> None:
    if _is_missing(user_id):
        raise InvalidRequest({"user_id": ["Missing user id"]})
    if _is_missing(address_id):
        raise InvalidRequest({"address_id": ["Missing address id"]})
    if not isinstance(items, Sequence) or isinstance(items, str | bytes) or not items:
        raise InvalidRequest({"items": ["Cart is empty"]})


def place_order(user_id, address_id, items, payment_id=None, tracking_number=None) -> OrderConfirmation:
    """Validate, price and atomically persist an order.

    Raises:
        InvalidRequest: missing identity, missing address or no items. The
            store is never touched.
        AddressNotFound: the address does not belong to `user_id`.
        PersistenceFailure: the unit of work failed and was rolled back.
    """
    try:
        _reject_invalid_request(user_id, address_id, items)
    except InvalidRequest as exc:
        logger.info("Order request rejected", user_id=user_id, errors=exc.messages)
        raise

    command = PlaceOrder(
        user_id=str(user_id),
        address_id=str(address_id),
        items=json.dumps(list(items), default=str),
        payment_id=payment_id,
        tracking_number=tracking_number,
    )

    try:
        confirmation = current_domain.process(command, asynchronous=False)
    except (ValidationError, ObjectNotFoundError):
        raise
    except Exception as exc:
        logger.exception(
            "Error placing order",
            user_id=str(user_id),
            address_id=str(address_id),
            item_count=len(items),
        )
        raise PersistenceFailure("Error placing order") from exc

    logger.info(
        "Order placed",
        order_id=confirmation.order_id,
        user_id=str(user_id),
        total=confirmation.total,
    )
    return confirmation
