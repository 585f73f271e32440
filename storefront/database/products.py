"""Catalog storage for the storefront"""

from decimal import Decimal
from typing import Iterable, Optional

from ..models.product import ALL, CareInfo, Item

PLACEHOLDER_IMG = "https://images.unsplash.com/photo-1598899134739-24b6b8443a86?q=80&w=1600&auto=format&fit=crop"

# Starter catalog, used when nothing has been persisted yet
INITIAL_ITEMS: list[Item] = [
    Item(
        id="p1",
        name="Monstera deliciosa",
        subtitle="Medium plant · Established",
        price=Decimal("38"),
        compare_at=Decimal("46"),
        category="Aroids",
        type="Medium plant",
        tags=["Easy", "Low light tolerant"],
        stock=12,
        image=PLACEHOLDER_IMG,
        description="Classic split-leaf beauty grown in an airy aroid mix. Expect 2-3 new leaves this season.",
        care=CareInfo(light="Bright indirect", water="When top 2\" is dry", humidity="40-60%"),
        payment_link="",
    ),
    Item(
        id="p2",
        name="Hoya kerrii (heart leaf)",
        subtitle="Starter plant · Rooted cutting",
        price=Decimal("16"),
        category="Hoyas",
        type="Starter plant",
        tags=["Giftable", "Drought tolerant"],
        stock=20,
        image="https://images.unsplash.com/photo-1606041008023-472dfb5e5303?q=80&w=1600&auto=format&fit=crop",
        description="Heart-shaped leaves. Thrives in chunky mix and bright light. Ships in 2.5\" nursery pot.",
        care=CareInfo(light="Bright to bright-indirect", water="Let dry between waterings", humidity="40%+"),
        payment_link="",
    ),
    Item(
        id="p3",
        name="Philodendron 'Pink Princess'",
        subtitle="Cutting · Variegated",
        price=Decimal("68"),
        compare_at=Decimal("79"),
        category="Aroids",
        type="Cutting",
        tags=["Variegated", "Collector"],
        stock=6,
        image="https://images.unsplash.com/photo-1605087158074-3f0b4f7b82ec?q=80&w=1600&auto=format&fit=crop",
        description="Stable pink streaks, one-node cutting with aerial root. Packed with warmth pack as needed.",
        care=CareInfo(light="Bright indirect", water="Keep slightly moist", humidity="60%+"),
        payment_link="",
    ),
    Item(
        id="p4",
        name="Alocasia corm mix (3-pack)",
        subtitle="Corms · Dormant",
        price=Decimal("12"),
        category="Alocasia",
        type="Corms",
        tags=["Budget", "Fun project"],
        stock=18,
        image="https://images.unsplash.com/photo-1598899134374-2e7bade36dd9?q=80&w=1600&auto=format&fit=crop",
        description="Three healthy corms from mixed cultivars. Plant shallow in warm, humid conditions.",
        care=CareInfo(light="Bright indirect", water="Evenly moist", humidity="60%+"),
        payment_link="",
    ),
]


def _facet(values: Iterable[str]) -> list[str]:
    return [ALL, *sorted(set(values))]


class CatalogStore:
    """In-memory catalog, the source of truth for price and stock"""

    def __init__(self, items: Optional[Iterable[Item]] = None):
        source = INITIAL_ITEMS if items is None else items
        # Copies, so the seed list is never mutated through stock updates
        self.items: list[Item] = [item.model_copy(deep=True) for item in source]

    def get_item(self, item_id: str) -> Optional[Item]:
        """Get an item by ID"""
        return next((item for item in self.items if item.id == item_id), None)

    def get_all_items(self) -> list[Item]:
        """Get all items in catalog order"""
        return list(self.items)

    def items_by_id(self) -> dict[str, Item]:
        return {item.id: item for item in self.items}

    def search_items(
        self,
        query: Optional[str] = None,
        category: Optional[str] = ALL,
        type: Optional[str] = ALL,
    ) -> list[Item]:
        """
        Filter the catalog.

        The query is a case-insensitive substring match over name, subtitle
        and tags. Category and type must match exactly unless they are "All"
        or None. All filters apply together; catalog order is kept.
        """
        results = list(self.items)

        if query:
            query_lower = query.lower()
            results = [item for item in results if query_lower in item.search_text()]

        if category and category != ALL:
            results = [item for item in results if item.category == category]

        if type and type != ALL:
            results = [item for item in results if item.type == type]

        return results

    def categories(self) -> list[str]:
        """Category facet, "All" first"""
        return _facet(item.category for item in self.items)

    def types(self) -> list[str]:
        """Type facet, "All" first"""
        return _facet(item.type for item in self.items)

    def update_stock(self, item_id: str, quantity_change: int) -> bool:
        """
        Update item stock.

        Args:
            item_id: Item to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        item = self.get_item(item_id)
        if not item:
            return False

        new_quantity = item.stock + quantity_change
        if new_quantity < 0:
            return False

        item.stock = new_quantity
        return True

    def set_stock(self, item_id: str, stock: int) -> bool:
        """Overwrite an item's stock count"""
        item = self.get_item(item_id)
        if not item or stock < 0:
            return False
        item.stock = stock
        return True

    def to_list(self) -> list[dict]:
        """JSON-ready snapshot for persistence"""
        return [item.model_dump(mode="json") for item in self.items]
