from uuid import uuid4

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def user_id():
    return f"user-{uuid4().hex[:12]}"


@pytest.fixture()
def other_user_id():
    return f"user-{uuid4().hex[:12]}"


@pytest.fixture()
def add_address():
    """Factory that saves an address through the AddAddress command and returns its id."""
    from protean import current_domain
    from storefront.customer.addresses import AddAddress

    def _add(user_id, **overrides):
        defaults = {
            "user_id": user_id,
            "full_name": "Jane Doe",
            "country": "US",
            "street": "123 Elm Street",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62701",
            "phone": "+1-555-0123",
        }
        defaults.update(overrides)
        return current_domain.process(AddAddress(**defaults), asynchronous=False)

    return _add
