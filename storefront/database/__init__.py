# Storage modules

from .products import CatalogStore, INITIAL_ITEMS
from .carts import CartStore
from .storage import (
    Storage,
    MemoryStorage,
    JsonFileStorage,
    CATALOG_KEY,
    CART_KEY,
    cart_key,
    load_validated,
)

__all__ = [
    "CatalogStore",
    "INITIAL_ITEMS",
    "CartStore",
    "Storage",
    "MemoryStorage",
    "JsonFileStorage",
    "CATALOG_KEY",
    "CART_KEY",
    "cart_key",
    "load_validated",
]
