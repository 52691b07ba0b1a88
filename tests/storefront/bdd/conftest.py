"""Shared BDD fixtures and step definitions for the Storefront domain."""

import pytest
from pytest_bdd import given, parsers, then
from storefront.customer.addresses import list_addresses
from storefront.order.history import get_orders_for_user


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def outcome():
    """Container for the placement result or the error it raised."""
    return {"confirmation": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a shopper with a saved address", target_fixture="shopper")
def shopper_with_address(user_id, add_address):
    return {"user_id": user_id, "address_id": add_address(user_id)}


@given("another shopper with a saved address", target_fixture="other_shopper")
def other_shopper_with_address(other_user_id, add_address):
    return {"user_id": other_user_id, "address_id": add_address(other_user_id, street="9 Other Rd")}


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the shopper has exactly {count:d} primary address"))
def exactly_n_primary(shopper, count):
    primaries = [a for a in list_addresses(shopper["user_id"]) if a.is_primary]
    assert len(primaries) == count


@then("the order history is empty")
def order_history_empty(shopper):
    assert get_orders_for_user(shopper["user_id"]) == []
