"""Cart storage for the storefront"""

from decimal import Decimal
from typing import Iterable, Optional

from ..models.cart import AddStatus, AddToCartResult, CartCommand, CartLine, StockIssue
from ..models.product import Item
from .products import CatalogStore


class CartStore:
    """
    One shopper's cart.

    Holds at most one line per item, in insertion order. Items are only read
    from the catalog, never modified.
    """

    def __init__(self, lines: Optional[Iterable[CartLine]] = None):
        self.lines: list[CartLine] = []
        for line in lines or []:
            # Ignore duplicates and empty lines from stale snapshots
            if line.quantity > 0 and self.get_line(line.item_id) is None:
                self.lines.append(line.model_copy())

    def get_line(self, item_id: str) -> Optional[CartLine]:
        """Get the line for an item"""
        return next((line for line in self.lines if line.item_id == item_id), None)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def is_empty(self) -> bool:
        return not self.lines

    def add(self, item: Item, quantity: int = 1) -> AddToCartResult:
        """
        Add an item, capping the line at the item's current stock.

        Out-of-stock items and non-positive quantities leave the cart
        unchanged; the result status says which.
        """
        if item.stock <= 0:
            return AddToCartResult(status=AddStatus.OUT_OF_STOCK, requested=quantity)
        if quantity < 1:
            return AddToCartResult(status=AddStatus.INVALID_QUANTITY, requested=quantity)

        existing_line = self.get_line(item.id)

        if existing_line:
            wanted = existing_line.quantity + quantity
            existing_line.quantity = min(wanted, item.stock)
            line = existing_line
            status = AddStatus.UPDATED
        else:
            wanted = quantity
            line = CartLine(
                item_id=item.id,
                name=item.name,
                price=item.price,
                quantity=min(quantity, item.stock),
            )
            self.lines.append(line)
            status = AddStatus.ADDED

        if line.quantity < wanted:
            status = AddStatus.LIMITED

        return AddToCartResult(
            status=status,
            line=line.model_copy(),
            requested=quantity,
            commands=[CartCommand.OPEN_CART],
        )

    def update_quantity(self, item_id: str, delta: int) -> Optional[CartLine]:
        """
        Adjust a line's quantity by delta.

        The quantity never drops below zero and a line reaching zero is
        removed. Stock is not checked here.

        Returns:
            The updated line, or None if it was removed or never existed
        """
        line = self.get_line(item_id)
        if not line:
            return None

        new_quantity = max(0, line.quantity + delta)
        if new_quantity == 0:
            self.remove(item_id)
            return None

        line.quantity = new_quantity
        return line

    def remove(self, item_id: str) -> bool:
        """Remove an item's line; False if it was not in the cart"""
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.item_id != item_id]
        return len(self.lines) != before

    def clear(self) -> None:
        """Clear all lines from cart"""
        self.lines = []

    def stock_issues(self, catalog: CatalogStore) -> list[StockIssue]:
        """Lines asking for more than the catalog currently holds"""
        issues = []
        for line in self.lines:
            item = catalog.get_item(line.item_id)
            available = item.stock if item else 0
            if line.quantity > available:
                issues.append(
                    StockIssue(
                        item_id=line.item_id,
                        name=line.name,
                        quantity=line.quantity,
                        available=available,
                    )
                )
        return issues

    def reconcile(self, catalog: CatalogStore) -> list[StockIssue]:
        """
        Clamp lines to current stock.

        Lines whose item is gone or sold out are dropped.

        Returns:
            The issues that were corrected
        """
        issues = self.stock_issues(catalog)
        for issue in issues:
            if issue.available == 0:
                self.remove(issue.item_id)
            else:
                self.get_line(issue.item_id).quantity = issue.available
        return issues

    def to_list(self) -> list[dict]:
        """JSON-ready snapshot for persistence"""
        return [line.model_dump(mode="json") for line in self.lines]
