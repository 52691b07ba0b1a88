"""Order history: a user's orders with their items nested."""

from collections import defaultdict

from protean.utils.globals import current_domain

from storefront.order.order import Order


def _item_to_dict(item) -> dict:
    return {
        "item_id": str(item.id),
        "order_id": str(item.order_id),
        "product_id": str(item.product_id) if item.product_id else None,
        "name": item.name,
        "price": item.price,
        "quantity": item.quantity,
    }


def _order_to_dict(order, items) -> dict:
    return {
        "order_id": str(order.id),
        "user_id": str(order.user_id),
        "address_id": str(order.address_id),
        "payment_id": order.payment_id,
        "tracking_number": order.tracking_number,
        "total": order.total,
        "status": order.status,
        "created_at": order.created_at,
        "items": items,
    }


def get_orders_for_user(user_id) -> list[dict]:
    """Return the user's orders newest first, each with its `items`.

    Items for all orders are loaded with a single batched query and grouped
    by order. A user without orders gets an empty list.
    """
    repo = current_domain.repository_for(Order)
    orders = repo.find_by_user(user_id)
    if not orders:
        return []

    items_by_order = defaultdict(list)
    for item in repo.items_for_orders([order.id for order in orders]):
        items_by_order[str(item.order_id)].append(_item_to_dict(item))

    return [_order_to_dict(order, items_by_order.get(str(order.id), [])) for order in orders]
