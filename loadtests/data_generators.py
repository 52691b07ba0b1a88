"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that match the exact field names expected
by the Storefront API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def user_id() -> str:
    """Generate identities for the X-User-ID header like 'user-lt-a1b2c3d4'."""
    return f"user-lt-{uuid.uuid4().hex[:8]}"


def valid_phone() -> str:
    area = random.randint(200, 999)
    prefix = random.randint(200, 999)
    line = random.randint(1000, 9999)
    return f"+1-{area}-{prefix}-{line}"


def address_data(is_primary: bool = False) -> dict:
    """Generate AddAddressRequest payload matching schema field names."""
    return {
        "full_name": fake.name()[:150],
        "country": "US",
        "street": fake.street_address()[:255],
        "unit": random.choice([None, f"Apt {random.randint(1, 40)}"]),
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zip_code": fake.zipcode()[:20],
        "phone": valid_phone(),
        "is_primary": is_primary,
    }


def cart_line() -> dict:
    """A well-formed cart line."""
    return {
        "product_id": f"prod-{uuid.uuid4().hex[:6]}",
        "name": f"{fake.word().capitalize()} {fake.word().capitalize()}"[:255],
        "price": round(random.uniform(0.99, 199.99), 2),
        "quantity": random.randint(1, 4),
    }


def malformed_cart_line() -> dict:
    """A cart line the API coerces instead of rejecting."""
    return random.choice(
        [
            {"name": "Mystery", "price": "abc", "quantity": "x"},
            {"price": -5, "quantity": -1},
            {"name": "Half", "price": "3.333", "quantity": 2.5},
            {},
        ]
    )


def cart_items(min_lines: int = 1, max_lines: int = 5, malformed_ratio: float = 0.0) -> list[dict]:
    """Generate the `items` list of a PlaceOrderRequest."""
    return [
        malformed_cart_line() if random.random() < malformed_ratio else cart_line()
        for _ in range(random.randint(min_lines, max_lines))
    ]


def payment_id() -> str:
    return f"pay-lt-{uuid.uuid4().hex[:10]}"
