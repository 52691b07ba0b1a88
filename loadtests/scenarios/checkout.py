"""Checkout load test scenarios.

Stateful SequentialTaskSet journeys covering address book management and
order placement. Steps execute in order and each depends on the previous
step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import address_data, cart_items, payment_id, user_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState(user_id=user_id())

    def _add_address(self, is_primary: bool = False) -> str | None:
        with self.client.post(
            "/addresses",
            json=address_data(is_primary=is_primary),
            headers=self.state.headers,
            catch_response=True,
            name="POST /addresses",
        ) as resp:
            if resp.status_code == 201:
                address_id = resp.json()["address_id"]
                self.state.address_ids.append(address_id)
                if is_primary or self.state.primary_address_id is None:
                    self.state.primary_address_id = address_id
                return address_id

            resp.failure(f"Add address failed: {resp.status_code}: {extract_error_detail(resp)}")
            self.interrupt()

    def _place_order(self, address_id: str, items: list[dict]):
        with self.client.post(
            "/orders",
            json={"address_id": address_id, "items": items, "payment_id": payment_id()},
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_ids.append(body["order_id"])
                self.state.spent += body["total"]
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")

    def _list_orders(self):
        with self.client.get(
            "/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif len(resp.json()) != len(self.state.order_ids):
                resp.failure(f"Expected {len(self.state.order_ids)} orders, got {len(resp.json())}")


class FirstCheckoutJourney(_ShopperJourney):
    """Add Address -> Fetch Primary -> Place Order -> List Orders."""

    @task
    def add_address(self):
        self._add_address()

    @task
    def fetch_primary(self):
        with self.client.get(
            "/addresses/primary",
            headers=self.state.headers,
            catch_response=True,
            name="GET /addresses/primary",
        ) as resp:
            if resp.status_code != 200 or resp.json()["address_id"] != self.state.primary_address_id:
                resp.failure(f"Primary address mismatch: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def place_order(self):
        self._place_order(self.state.primary_address_id, cart_items())

    @task
    def list_orders(self):
        self._list_orders()

    @task
    def done(self):
        self.interrupt()


class ReturningShopperJourney(_ShopperJourney):
    """Add 3 Addresses -> Switch Primary -> Place Orders -> List Orders.

    Checks that exactly one address is primary after the switch.
    """

    @task
    def add_addresses(self):
        for _ in range(3):
            self._add_address()

    @task
    def switch_primary(self):
        address_id = random.choice(self.state.address_ids[1:])
        with self.client.put(
            f"/addresses/{address_id}/primary",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /addresses/{id}/primary",
        ) as resp:
            if resp.status_code == 200:
                self.state.primary_address_id = address_id
            else:
                resp.failure(f"Set primary failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def verify_single_primary(self):
        with self.client.get(
            "/addresses",
            headers=self.state.headers,
            catch_response=True,
            name="GET /addresses",
        ) as resp:
            primaries = [a["address_id"] for a in resp.json() if a["is_primary"]] if resp.status_code == 200 else []
            if primaries != [self.state.primary_address_id]:
                resp.failure(f"Expected one primary {self.state.primary_address_id}, got {primaries}")

    @task
    def place_orders(self):
        for address_id in random.sample(self.state.address_ids, k=2):
            self._place_order(address_id, cart_items(malformed_ratio=0.2))

    @task
    def list_orders(self):
        self._list_orders()

    @task
    def done(self):
        self.interrupt()


class RejectedCheckoutJourney(_ShopperJourney):
    """Empty cart and foreign address attempts. Both must be refused."""

    @task
    def add_address(self):
        self._add_address()

    @task
    def empty_cart(self):
        with self.client.post(
            "/orders",
            json={"address_id": self.state.primary_address_id, "items": []},
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders [empty]",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Empty cart not rejected: {resp.status_code}")

    @task
    def foreign_address(self):
        with self.client.post(
            "/orders",
            json={"address_id": self.state.primary_address_id, "items": cart_items()},
            headers={"X-User-ID": user_id()},
            catch_response=True,
            name="POST /orders [foreign address]",
        ) as resp:
            if resp.status_code == 404:
                resp.success()
            else:
                resp.failure(f"Foreign address not rejected: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    """Locust user simulating storefront checkout traffic.

    Weighted task distribution:
    - 50% First checkout (most common)
    - 35% Returning shopper
    - 15% Rejected checkout
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        FirstCheckoutJourney: 10,
        ReturningShopperJourney: 7,
        RejectedCheckoutJourney: 3,
    }
