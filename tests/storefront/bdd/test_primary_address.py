"""BDD tests for the primary address."""

from protean import current_domain
from pytest_bdd import given, scenarios, then, when
from storefront.customer.addresses import SetPrimaryAddress, primary_address_for

scenarios("features/primary_address.feature")


@given("the shopper saves a second address", target_fixture="second_address_id")
def _(shopper, add_address):
    return add_address(shopper["user_id"], street="456 Oak Ave")


@when("the shopper makes the second address primary")
def _(shopper, second_address_id):
    current_domain.process(
        SetPrimaryAddress(user_id=shopper["user_id"], address_id=second_address_id),
        asynchronous=False,
    )


@then("the primary address is the second address")
def _(shopper, second_address_id):
    assert primary_address_for(shopper["user_id"]).address_id == second_address_id
