"""Cart models for the storefront"""

from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional

from .checkout import Destination, PricingBreakdown


class CartLine(BaseModel):
    """Line in a shopping cart, with the name and price seen at first add"""
    item_id: str
    name: str
    price: Decimal
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class AddStatus(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    LIMITED = "limited"  # Requested quantity capped by stock
    OUT_OF_STOCK = "out_of_stock"
    INVALID_QUANTITY = "invalid_quantity"


class CartCommand(str, Enum):
    """Side effects the presentation layer should perform"""
    OPEN_CART = "open_cart"


class AddToCartResult(BaseModel):
    """Outcome of a cart add"""
    status: AddStatus
    line: Optional[CartLine] = None
    requested: int
    commands: list[CartCommand] = []

    @property
    def changed(self) -> bool:
        return self.status not in (AddStatus.OUT_OF_STOCK, AddStatus.INVALID_QUANTITY)


class StockIssue(BaseModel):
    """Cart line that no longer fits the catalog's stock"""
    item_id: str
    name: str
    quantity: int
    available: int


class Cart(BaseModel):
    """Shopping cart as handed to the presentation layer"""
    cart_id: str
    lines: list[CartLine] = []
    item_count: int = 0
    destination: Destination
    notes: str = ""


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    item_id: str
    quantity: int = Field(default=1, gt=0)


class UpdateQuantityRequest(BaseModel):
    """Request to adjust a line quantity by a delta"""
    delta: int


class UpdateNotesRequest(BaseModel):
    notes: str = ""


class CartResponse(BaseModel):
    """Cart API response"""
    cart: Cart
    pricing: PricingBreakdown
    stock_issues: list[StockIssue] = []
    message: Optional[str] = None


class AddToCartResponse(CartResponse):
    status: AddStatus
    commands: list[CartCommand] = []


class ReconcileResponse(CartResponse):
    adjusted: list[StockIssue] = []
