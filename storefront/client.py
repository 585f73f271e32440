"""
Storefront API Client

Async HTTP client for the storefront API, for pages and scripts that drive
the cart from outside the server process.
"""

import logging
from typing import Optional, Any

import httpx

logger = logging.getLogger(__name__)


class StorefrontClient:
    """Client for the storefront catalog, cart and checkout APIs"""

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the storefront API
            transport: Optional transport, e.g. httpx.ASGITransport for in-process use
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON"""
        response = await self._http_client.request(
            method=method,
            url=path,
            json=body,
            params=params,
            headers={"Accept": "application/json"},
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()

    # ==================== Catalog APIs ====================

    async def search_items(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        type: Optional[str] = None,
    ) -> dict:
        """Filter the catalog"""
        params = {}
        if query:
            params["query"] = query
        if category:
            params["category"] = category
        if type:
            params["type"] = type
        return await self._request("GET", "/api/products", params=params)

    async def get_item(self, item_id: str) -> dict:
        """Get item details"""
        return await self._request("GET", f"/api/products/{item_id}")

    async def get_facets(self) -> dict:
        """Get category and type facets"""
        return await self._request("GET", "/api/products/facets")

    # ==================== Cart APIs ====================

    async def create_cart(self) -> dict:
        """Create a new shopping cart"""
        return await self._request("POST", "/api/cart")

    async def get_cart(self, cart_id: str) -> dict:
        """Get cart by ID"""
        return await self._request("GET", f"/api/cart/{cart_id}")

    async def add_to_cart(
        self,
        cart_id: str,
        item_id: str,
        quantity: int = 1,
    ) -> dict:
        """Add item to cart"""
        return await self._request(
            "POST",
            f"/api/cart/{cart_id}/items",
            body={"item_id": item_id, "quantity": quantity},
        )

    async def update_quantity(self, cart_id: str, item_id: str, delta: int) -> dict:
        """Adjust item quantity in cart by delta"""
        return await self._request(
            "PATCH",
            f"/api/cart/{cart_id}/items/{item_id}",
            body={"delta": delta},
        )

    async def remove_from_cart(self, cart_id: str, item_id: str) -> dict:
        """Remove item from cart"""
        return await self._request("DELETE", f"/api/cart/{cart_id}/items/{item_id}")

    async def clear_cart(self, cart_id: str) -> dict:
        """Remove every item from cart"""
        return await self._request("DELETE", f"/api/cart/{cart_id}")

    async def reconcile_cart(self, cart_id: str) -> dict:
        """Clamp cart quantities to current stock"""
        return await self._request("POST", f"/api/cart/{cart_id}/reconcile")

    async def set_destination(self, cart_id: str, destination: dict) -> dict:
        """Set the ship-to destination"""
        return await self._request("PUT", f"/api/cart/{cart_id}/destination", body=destination)

    async def set_notes(self, cart_id: str, notes: str) -> dict:
        """Set order notes"""
        return await self._request("PUT", f"/api/cart/{cart_id}/notes", body={"notes": notes})

    # ==================== Checkout APIs ====================

    async def checkout(
        self,
        cart_id: str,
        destination: Optional[dict] = None,
        notes: Optional[str] = None,
    ) -> dict:
        """
        Resolve checkout.

        The returned outcome is either a list of payment links or an order
        message; acting on it is up to the caller.
        """
        body: dict[str, Any] = {"cart_id": cart_id}

        if destination is not None:
            body["destination"] = destination
        if notes is not None:
            body["notes"] = notes

        return await self._request("POST", "/api/checkout", body=body)

    async def get_rules(self) -> dict:
        """Get shipping and tax tables"""
        return await self._request("GET", "/api/checkout/rules")
