"""Checkout API routes for the storefront"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from ..core.session import SessionManager
from ..models.checkout import (
    CheckoutRequest,
    CheckoutResponse,
    RuleTablesResponse,
)
from .deps import get_session_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.post("", response_model=CheckoutResponse)
async def checkout(
    request: CheckoutRequest,
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Resolve checkout for a cart.

    When every item has a payment link the response lists the links to open.
    Otherwise it carries an order message (recipient, subject, body and a
    mailto: link) for the client to hand to a mail composer.
    """
    session = sessions.get_session(request.cart_id)
    if not session:
        raise HTTPException(status_code=404, detail="Cart not found")

    if session.cart.is_empty():
        raise HTTPException(status_code=400, detail="Cart is empty")

    # One-off overrides; the cart keeps its stored destination and notes
    outcome = session.checkout(destination=request.destination, notes=request.notes)

    logger.info(f"Checkout for cart {session.session_id}: {outcome.kind.value}")

    return CheckoutResponse(outcome=outcome, pricing=session.pricing(request.destination))


@router.get("/rules", response_model=RuleTablesResponse)
async def list_rules(sessions: SessionManager = Depends(get_session_manager)):
    """Shipping and tax tables in evaluation order"""
    rules = sessions.rules
    return RuleTablesResponse(
        shipping=[
            {"id": r.id, "label": r.label, "min_subtotal": r.min_subtotal, "rate": r.rate}
            for r in rules.shipping_rules
        ],
        tax=[
            {"id": r.id, "label": r.label, "percent": r.percent}
            for r in rules.tax_rules
        ],
    )
