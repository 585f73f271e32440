# Storefront Models

from .product import ALL, CareInfo, Item, ItemView, FacetsResponse, CatalogSearchResponse
from .checkout import (
    Destination,
    PricedLine,
    ShippingCharge,
    TaxCharge,
    PricingDisplay,
    PricingBreakdown,
    CheckoutKind,
    DirectPayment,
    ComposedMessage,
    CheckoutOutcome,
    CheckoutRequest,
    CheckoutResponse,
    RuleTablesResponse,
)
from .cart import (
    Cart,
    CartLine,
    AddStatus,
    CartCommand,
    AddToCartResult,
    StockIssue,
    AddToCartRequest,
    UpdateQuantityRequest,
    UpdateNotesRequest,
    CartResponse,
    AddToCartResponse,
    ReconcileResponse,
)

__all__ = [
    "ALL",
    "CareInfo",
    "Item",
    "ItemView",
    "FacetsResponse",
    "CatalogSearchResponse",
    "Destination",
    "PricedLine",
    "ShippingCharge",
    "TaxCharge",
    "PricingDisplay",
    "PricingBreakdown",
    "CheckoutKind",
    "DirectPayment",
    "ComposedMessage",
    "CheckoutOutcome",
    "CheckoutRequest",
    "CheckoutResponse",
    "RuleTablesResponse",
    "Cart",
    "CartLine",
    "AddStatus",
    "CartCommand",
    "AddToCartResult",
    "StockIssue",
    "AddToCartRequest",
    "UpdateQuantityRequest",
    "UpdateNotesRequest",
    "CartResponse",
    "AddToCartResponse",
    "ReconcileResponse",
]
