"""Application tests for order placement."""

import json
from unittest.mock import patch

import pytest
from protean import current_domain
from storefront.exceptions import AddressNotFound, InvalidRequest
from storefront.order.history import get_orders_for_user
from storefront.order.order import Order, OrderItem, OrderStatus
from storefront.order.placement import OrderConfirmation, PlaceOrder, place_order

CART = [
    {"product_id": "prod-001", "name": "Desk Lamp", "price": 29.99, "quantity": 2},
    {"product_id": "prod-002", "name": "Bulb", "price": 10.00, "quantity": 1},
]


class TestPlaceOrder:
    def test_returns_confirmation(self, user_id, add_address):
        address_id = add_address(user_id)

        confirmation = place_order(user_id, address_id, CART)

        assert isinstance(confirmation, OrderConfirmation)
        assert confirmation.total == pytest.approx(69.98)
        assert confirmation.to_dict() == {"order_id": confirmation.order_id, "total": confirmation.total}

    def test_persists_order_and_items(self, user_id, add_address):
        address_id = add_address(user_id)

        confirmation = place_order(user_id, address_id, CART, payment_id="pay-1", tracking_number="TRK-1")

        order = current_domain.repository_for(Order).get(confirmation.order_id)
        assert order.user_id == user_id
        assert order.address_id == address_id
        assert order.payment_id == "pay-1"
        assert order.tracking_number == "TRK-1"
        assert order.status == OrderStatus.PLACED.value
        assert order.total == pytest.approx(69.98)

        items = current_domain.repository_for(Order).items_for_orders([confirmation.order_id])
        assert sorted((i.name, i.quantity) for i in items) == [("Bulb", 1), ("Desk Lamp", 2)]

    def test_malformed_lines_are_coerced(self, user_id, add_address):
        address_id = add_address(user_id)

        confirmation = place_order(
            user_id,
            address_id,
            [
                {"price": "abc", "quantity": "x"},
                {"name": "Cable", "price": -3, "quantity": -2},
                {"name": "Mug", "price": "4.50", "quantity": 2.9},
            ],
        )

        assert confirmation.total == pytest.approx(9.00)
        (order,) = get_orders_for_user(user_id)
        by_name = {item["name"]: item for item in order["items"]}
        assert by_name["Item"]["price"] == 0.0
        assert by_name["Cable"]["quantity"] == 1
        assert by_name["Mug"]["quantity"] == 2

    def test_non_primary_address_is_accepted(self, user_id, add_address):
        add_address(user_id)
        secondary = add_address(user_id, street="456 Oak Ave")

        confirmation = place_order(user_id, secondary, CART)

        order = current_domain.repository_for(Order).get(confirmation.order_id)
        assert order.address_id == secondary

    def test_two_placements_create_two_orders(self, user_id, add_address):
        address_id = add_address(user_id)

        first = place_order(user_id, address_id, CART)
        second = place_order(user_id, address_id, CART)

        assert first.order_id != second.order_id
        assert len(get_orders_for_user(user_id)) == 2


class TestPlaceOrderRejections:
    @pytest.mark.parametrize("missing_user", [None, "", "   "])
    def test_missing_user(self, missing_user):
        with pytest.raises(InvalidRequest) as exc:
            place_order(missing_user, "addr-1", CART)
        assert "user_id" in exc.value.messages

    @pytest.mark.parametrize("missing_address", [None, ""])
    def test_missing_address(self, user_id, missing_address):
        with pytest.raises(InvalidRequest) as exc:
            place_order(user_id, missing_address, CART)
        assert "address_id" in exc.value.messages

    @pytest.mark.parametrize("items", [[], None, "not-a-list", {"price": 1}])
    def test_empty_or_invalid_items(self, user_id, add_address, items):
        address_id = add_address(user_id)

        with pytest.raises(InvalidRequest) as exc:
            place_order(user_id, address_id, items)
        assert exc.value.messages == {"items": ["Cart is empty"]}

    def test_invalid_request_never_reaches_the_store(self, user_id):
        with patch("storefront.order.placement.current_domain") as mock_domain:
            with pytest.raises(InvalidRequest):
                place_order(user_id, "addr-1", [])

        mock_domain.process.assert_not_called()

    def test_foreign_address_rejected(self, user_id, other_user_id, add_address):
        add_address(user_id)
        foreign = add_address(other_user_id)

        with pytest.raises(AddressNotFound):
            place_order(user_id, foreign, CART)

    def test_unknown_address_rejected(self, user_id, add_address):
        add_address(user_id)

        with pytest.raises(AddressNotFound):
            place_order(user_id, "no-such-address", CART)

    def test_rejection_leaves_no_order(self, user_id, other_user_id, add_address):
        foreign = add_address(other_user_id)

        with pytest.raises(AddressNotFound):
            place_order(user_id, foreign, CART)

        assert get_orders_for_user(user_id) == []
        assert current_domain.repository_for(OrderItem)._dao.query.all().items == []


class TestPlaceOrderCommand:
    def test_command_through_domain(self, user_id, add_address):
        address_id = add_address(user_id)

        confirmation = current_domain.process(
            PlaceOrder(user_id=user_id, address_id=address_id, items=json.dumps(CART)),
            asynchronous=False,
        )

        assert confirmation.total == pytest.approx(69.98)

    def test_command_with_empty_items_rejected(self, user_id, add_address):
        address_id = add_address(user_id)

        with pytest.raises(InvalidRequest):
            current_domain.process(
                PlaceOrder(user_id=user_id, address_id=address_id, items="[]"),
                asynchronous=False,
            )
