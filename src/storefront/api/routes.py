"""FastAPI routes for the Storefront domain — orders and addresses.

The caller's identity comes from the upstream auth layer in the `X-User-ID`
header and is trusted as given.
"""

from fastapi import APIRouter, Header
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddAddressRequest,
    AddressIdResponse,
    AddressResponse,
    OrderPlacedResponse,
    OrderResponse,
    PlaceOrderRequest,
    StatusResponse,
)
from storefront.customer.addresses import (
    AddAddress,
    SetPrimaryAddress,
    list_addresses,
    primary_address_for,
)
from storefront.exceptions import InvalidRequest
from storefront.order.history import get_orders_for_user
from storefront.order.placement import place_order
from storefront.utils.logging import add_context


def _require_user(x_user_id: str | None) -> str:
    if x_user_id is None or not x_user_id.strip():
        raise InvalidRequest({"user_id": ["Missing user id"]})
    add_context(user_id=x_user_id)
    return x_user_id


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderPlacedResponse)
async def create_order(
    body: PlaceOrderRequest,
    x_user_id: str | None = Header(default=None),
) -> OrderPlacedResponse:
    """Place an order for the caller's cart lines."""
    if x_user_id:
        add_context(user_id=x_user_id)
    confirmation = place_order(
        user_id=x_user_id,
        address_id=body.address_id,
        items=body.items,
        payment_id=body.payment_id,
        tracking_number=body.tracking_number,
    )
    return OrderPlacedResponse(**confirmation.to_dict())


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(x_user_id: str | None = Header(default=None)) -> list[OrderResponse]:
    """The caller's orders, newest first, with their items."""
    user_id = _require_user(x_user_id)
    return [OrderResponse(**order) for order in get_orders_for_user(user_id)]


# ---------------------------------------------------------------------------
# Address Router
# ---------------------------------------------------------------------------
address_router = APIRouter(prefix="/addresses", tags=["addresses"])


@address_router.get("", response_model=list[AddressResponse])
async def get_addresses(x_user_id: str | None = Header(default=None)) -> list[AddressResponse]:
    user_id = _require_user(x_user_id)
    return [AddressResponse(**address.to_dict()) for address in list_addresses(user_id)]


@address_router.get("/primary", response_model=AddressResponse | None)
async def get_primary_address(x_user_id: str | None = Header(default=None)) -> AddressResponse | None:
    user_id = _require_user(x_user_id)
    address = primary_address_for(user_id)
    return AddressResponse(**address.to_dict()) if address is not None else None


@address_router.post("", status_code=201, response_model=AddressIdResponse)
async def add_address(
    body: AddAddressRequest,
    x_user_id: str | None = Header(default=None),
) -> AddressIdResponse:
    user_id = _require_user(x_user_id)
    command = AddAddress(
        user_id=user_id,
        full_name=body.full_name,
        country=body.country,
        street=body.street,
        unit=body.unit,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        phone=body.phone,
        is_primary=body.is_primary,
    )
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


@address_router.put("/{address_id}/primary", response_model=StatusResponse)
async def set_primary_address(
    address_id: str,
    x_user_id: str | None = Header(default=None),
) -> StatusResponse:
    user_id = _require_user(x_user_id)
    command = SetPrimaryAddress(user_id=user_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
