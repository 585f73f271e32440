"""Route dependencies"""

from fastapi import Depends, HTTPException, Request

from ..core.session import SessionManager, ShopSession


def get_session_manager(request: Request) -> SessionManager:
    """Session manager attached to the running app"""
    return request.app.state.sessions


def get_shop_session(
    cart_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> ShopSession:
    """Resolve the cart_id path parameter to its session"""
    session = sessions.get_session(cart_id)
    if not session:
        raise HTTPException(status_code=404, detail="Cart not found")
    return session
