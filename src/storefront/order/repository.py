"""Repository for the Order aggregate and its order items."""

from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderItem


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_user(self, user_id) -> list[Order]:
        """All orders of a user, newest first, without the default row limit."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items

    def items_for_orders(self, order_ids) -> list[OrderItem]:
        """Items of all the given orders, fetched in one query."""
        order_ids = [str(order_id) for order_id in order_ids]
        if not order_ids:
            return []

        item_dao = current_domain.repository_for(OrderItem)._dao
        return item_dao.query.filter(order_id__in=order_ids).limit(None).all().items
