"""FastAPI routes for the Identity context — address book and wishlist."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from shopfront.api.auth import Principal, current_principal
from shopfront.identity.address.address import addresses_of
from shopfront.identity.address.management import AddAddress, MakeDefaultAddress, RemoveAddress, ReviseAddress
from shopfront.identity.api.schemas import (
    AddAddressRequest,
    AddressIdResponse,
    StatusResponse,
    UpdateAddressRequest,
    WishlistToggleResponse,
)
from shopfront.identity.wishlist.wishlist import ToggleWishlist, like_count, wishlist_of

# ---------------------------------------------------------------------------
# Address Router
# ---------------------------------------------------------------------------
address_router = APIRouter(prefix="/addresses", tags=["addresses"])


@address_router.get("")
async def list_addresses(principal: Principal = Depends(current_principal)) -> list[dict]:
    return [address.to_dict() for address in addresses_of(principal.user_id)]


@address_router.post("", status_code=201, response_model=AddressIdResponse)
async def add_address(body: AddAddressRequest, principal: Principal = Depends(current_principal)) -> AddressIdResponse:
    command = AddAddress(user_id=principal.user_id, **body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


@address_router.put("/{address_id}", response_model=StatusResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, principal: Principal = Depends(current_principal)
) -> StatusResponse:
    command = ReviseAddress(user_id=principal.user_id, address_id=address_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@address_router.delete("/{address_id}", response_model=StatusResponse)
async def delete_address(address_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    current_domain.process(RemoveAddress(user_id=principal.user_id, address_id=address_id), asynchronous=False)
    return StatusResponse(status="deleted")


@address_router.put("/{address_id}/default", response_model=StatusResponse)
async def make_default_address(address_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    current_domain.process(MakeDefaultAddress(user_id=principal.user_id, address_id=address_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Wishlist Router
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@wishlist_router.get("")
async def my_wishlist(principal: Principal = Depends(current_principal)) -> list[dict]:
    return [
        {"product_id": str(entry.product_id), "added_at": entry.added_at.isoformat() if entry.added_at else None}
        for entry in wishlist_of(principal.user_id)
    ]


@wishlist_router.post("/{product_id}/toggle", response_model=WishlistToggleResponse)
async def toggle_wishlist(product_id: str, principal: Principal = Depends(current_principal)) -> WishlistToggleResponse:
    result = current_domain.process(ToggleWishlist(user_id=principal.user_id, product_id=product_id), asynchronous=False)
    return WishlistToggleResponse(liked=result["liked"], count=like_count(product_id))
