"""Catalog item models for the storefront"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

# Sentinel facet value that disables a category/type filter
ALL = "All"

LOW_STOCK_THRESHOLD = 5


class CareInfo(BaseModel):
    """Plant care hints shown on the product card"""
    light: Optional[str] = None
    water: Optional[str] = None
    humidity: Optional[str] = None


class Item(BaseModel):
    """Sellable item in the catalog"""
    id: str
    name: str
    subtitle: str = ""
    price: Decimal = Field(ge=0)
    compare_at: Optional[Decimal] = None  # Display only, never priced
    category: str
    type: str
    tags: list[str] = []
    stock: int = Field(ge=0, default=0)
    image: Optional[str] = None
    description: Optional[str] = None
    care: Optional[CareInfo] = None
    # External checkout reference; empty string means no link
    payment_link: Optional[str] = None

    class Config:
        from_attributes = True

    @property
    def has_payment_link(self) -> bool:
        return bool(self.payment_link)

    @property
    def is_available(self) -> bool:
        return self.stock > 0

    @property
    def on_sale(self) -> bool:
        return self.compare_at is not None and self.compare_at > self.price

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.stock <= LOW_STOCK_THRESHOLD

    def search_text(self) -> str:
        """Lower-cased text the free-text query is matched against"""
        return " ".join([self.name, self.subtitle, " ".join(self.tags)]).lower()


class ItemView(BaseModel):
    """Item as rendered on a product card"""
    item: Item
    on_sale: bool
    low_stock: bool
    available: bool
    buy_now_url: Optional[str] = None

    @classmethod
    def from_item(cls, item: Item) -> "ItemView":
        return cls(
            item=item,
            on_sale=item.on_sale,
            low_stock=item.is_low_stock,
            available=item.is_available,
            buy_now_url=item.payment_link or None,
        )


class FacetsResponse(BaseModel):
    """Facet lists for the filter dropdowns"""
    categories: list[str]
    types: list[str]


class CatalogSearchResponse(BaseModel):
    """Response from catalog search"""
    items: list[ItemView]
    total: int
    query: str = ""
    category: str = ALL
    type: str = ALL
    facets: FacetsResponse
