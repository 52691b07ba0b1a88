"""Pydantic request/response schemas for the Storefront API.

These are external contracts, separate from the internal Protean commands.
Cart line fields are deliberately loose: the core coerces malformed prices
and quantities instead of rejecting them.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_id": "addr-001",
                    "payment_id": "pay-001",
                    "items": [
                        {"product_id": "prod-001", "name": "Desk Lamp", "price": 29.99, "quantity": 2},
                        {"product_id": "prod-002", "name": "Bulb", "price": 10.00, "quantity": 1},
                    ],
                }
            ]
        }
    }

    address_id: str | None = None
    payment_id: str | None = Field(None, max_length=255)
    tracking_number: str | None = Field(None, max_length=255)
    items: list[Any] = Field(default_factory=list)


class OrderPlacedResponse(BaseModel):
    message: str = "Order placed successfully"
    order_id: str
    total: float


class OrderItemResponse(BaseModel):
    item_id: str
    order_id: str
    product_id: str | None = None
    name: str
    price: float
    quantity: int


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    address_id: str
    payment_id: str | None = None
    tracking_number: str | None = None
    total: float
    status: str
    created_at: datetime | None = None
    items: list[OrderItemResponse] = []


# ---------------------------------------------------------------------------
# Address Schemas
# ---------------------------------------------------------------------------
class AddAddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Jane Doe",
                    "country": "US",
                    "street": "123 Elm Street",
                    "unit": "Apt 4",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "phone": "+1-555-0123",
                    "is_primary": True,
                }
            ]
        }
    }

    full_name: str = Field(..., max_length=150)
    country: str = Field(..., max_length=100)
    street: str = Field(..., max_length=255)
    unit: str | None = Field(None, max_length=50)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=20)
    phone: str = Field(..., max_length=30)
    is_primary: bool = False


class AddressIdResponse(BaseModel):
    address_id: str


class AddressResponse(BaseModel):
    address_id: str
    user_id: str
    full_name: str
    country: str
    street: str
    unit: str | None = None
    city: str
    state: str
    zip_code: str
    phone: str
    is_primary: bool
    created_at: datetime | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
