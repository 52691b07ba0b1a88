"""Order aggregate with its OrderItem entities.

An order is written once by the placement unit of work: the header and every
line item are persisted together or not at all. Items carry denormalized
name and price snapshots so order history keeps rendering the same even after
the catalogue changes or a product is deleted.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderPlaced


class OrderStatus(Enum):
    PLACED = "Order Placed"


@storefront.entity(part_of="Order")
class OrderItem:
    """A line of an order: snapshot name and unit price, whole quantity."""

    product_id: Identifier()  # Nullable, product may later leave the catalogue
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=1)


@storefront.aggregate
class Order:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    payment_id: String(max_length=255)
    tracking_number: String(max_length=255)
    total: Float(required=True, min_value=0.0)
    status: String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    items: HasMany(OrderItem)
    created_at: DateTime()

    @classmethod
    def place(cls, user_id, address_id, lines, total, payment_id=None, tracking_number=None):
        """Build a new order from normalized lines and their precomputed total.

        Args:
            user_id: The owner of the order.
            address_id: An address already validated as owned by `user_id`.
            lines: Non-empty sequence of `NormalizedLine`.
            total: Grand total (Decimal) computed from `lines`.
        """
        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=line.product_id,
                name=line.name,
                price=float(line.price),
                quantity=line.quantity,
            )
            for line in lines
        ]

        order = cls(
            user_id=user_id,
            address_id=address_id,
            payment_id=payment_id,
            tracking_number=tracking_number,
            total=float(total),
            status=OrderStatus.PLACED.value,
            created_at=now,
        )
        for item in items:
            order.add_items(item)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                address_id=str(address_id),
                payment_id=payment_id,
                total=float(total),
                item_count=len(items),
                created_at=now,
            )
        )
        return order
