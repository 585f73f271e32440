"""Cart API routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Depends

from ..core.session import SessionManager, ShopSession
from ..models.cart import (
    AddStatus,
    AddToCartRequest,
    AddToCartResponse,
    CartResponse,
    ReconcileResponse,
    UpdateNotesRequest,
    UpdateQuantityRequest,
)
from ..models.checkout import Destination
from .deps import get_session_manager, get_shop_session

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def cart_response(session: ShopSession, message: Optional[str] = None) -> CartResponse:
    return CartResponse(
        cart=session.to_cart(),
        pricing=session.pricing(),
        stock_issues=session.stock_issues(),
        message=message,
    )


@router.post("", response_model=CartResponse, status_code=201)
async def create_cart(sessions: SessionManager = Depends(get_session_manager)):
    """Create a new shopping cart"""
    session = sessions.create_session()
    return cart_response(session, message="Cart created")


@router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(session: ShopSession = Depends(get_shop_session)):
    """Get cart with its pricing"""
    return cart_response(session)


@router.post("/{cart_id}/items", response_model=AddToCartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: ShopSession = Depends(get_shop_session),
):
    """
    Add an item to the cart.

    Sold-out items leave the cart unchanged and report out_of_stock; quantities
    beyond stock are capped and report limited.
    """
    result = session.add_item(request.item_id, request.quantity)
    if result is None:
        raise HTTPException(status_code=404, detail="Item not found")

    item = session.catalog.get_item(request.item_id)
    if result.status == AddStatus.OUT_OF_STOCK:
        message = f"{item.name} is out of stock"
    elif result.status == AddStatus.LIMITED:
        message = f"Only {item.stock} of {item.name} available"
    else:
        message = f"Added {request.quantity}x {item.name} to cart"

    base = cart_response(session, message=message)
    return AddToCartResponse(
        **base.model_dump(),
        status=result.status,
        commands=result.commands,
    )


@router.patch("/{cart_id}/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str,
    request: UpdateQuantityRequest,
    session: ShopSession = Depends(get_shop_session),
):
    """Adjust an item's quantity; reaching zero removes it"""
    if not session.cart.get_line(item_id):
        raise HTTPException(status_code=404, detail="Item not in cart")

    session.update_quantity(item_id, request.delta)
    return cart_response(session, message="Cart updated")


@router.delete("/{cart_id}/items/{item_id}", response_model=CartResponse)
async def remove_from_cart(
    item_id: str,
    session: ShopSession = Depends(get_shop_session),
):
    """Remove an item from the cart"""
    session.remove_item(item_id)
    return cart_response(session, message="Item removed")


@router.delete("/{cart_id}", response_model=CartResponse)
async def clear_cart(session: ShopSession = Depends(get_shop_session)):
    """Clear all items from cart"""
    session.clear_cart()
    return cart_response(session, message="Cart cleared")


@router.post("/{cart_id}/reconcile", response_model=ReconcileResponse)
async def reconcile_cart(session: ShopSession = Depends(get_shop_session)):
    """Clamp cart quantities to the catalog's current stock"""
    adjusted = session.reconcile()
    base = cart_response(session, message=f"{len(adjusted)} line(s) adjusted")
    return ReconcileResponse(**base.model_dump(), adjusted=adjusted)


@router.put("/{cart_id}/destination", response_model=CartResponse)
async def set_destination(
    destination: Destination,
    session: ShopSession = Depends(get_shop_session),
):
    """Set the ship-to destination used for tax"""
    session.set_destination(destination)
    return cart_response(session, message="Destination updated")


@router.put("/{cart_id}/notes", response_model=CartResponse)
async def set_notes(
    request: UpdateNotesRequest,
    session: ShopSession = Depends(get_shop_session),
):
    """Set the order notes included in order messages"""
    session.set_notes(request.notes)
    return cart_response(session, message="Notes updated")
