"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, never shared across users.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopper."""

    user_id: str
    address_ids: list[str] = field(default_factory=list)
    primary_address_id: str | None = None
    order_ids: list[str] = field(default_factory=list)
    spent: float = 0.0

    @property
    def headers(self) -> dict:
        return {"X-User-ID": self.user_id}
