"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order and all its items were committed with status "Order Placed"."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    payment_id: String()
    total: Float(required=True)
    item_count: Integer(required=True)
    created_at: DateTime(required=True)
