"""Shop sessions: the catalog and cart stores a shopper works against"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Union
from dataclasses import dataclass, field

from ..database.carts import CartStore
from ..database.products import CatalogStore
from ..database.storage import CATALOG_KEY, MemoryStorage, Storage, cart_key, load_validated
from ..models.cart import AddToCartResult, Cart, CartLine, StockIssue
from ..models.checkout import ComposedMessage, Destination, DirectPayment, PricingBreakdown
from ..models.product import Item
from ..pricing.calculator import calculate_pricing
from ..pricing.checkout import resolve_checkout
from ..pricing.rules import DEFAULT_RULES, RuleConfig

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Brand:
    """Seller identity used in order messages"""
    name: str
    email: str
    tagline: str = ""


@dataclass
class ShopSession:
    """
    One shopper's view of the store.

    Every cart mutation is saved to storage right after it is applied.
    """
    session_id: str
    catalog: CatalogStore
    storage: Storage
    brand: Brand
    destination: Destination
    rules: RuleConfig = DEFAULT_RULES
    cart: CartStore = field(default_factory=CartStore)
    notes: str = ""
    updated_at: datetime = field(default_factory=_now)

    def _changed(self) -> None:
        self.updated_at = _now()
        self.storage.save(cart_key(self.session_id), self.cart.to_list())

    def add_item(self, item_id: str, quantity: int = 1) -> Optional[AddToCartResult]:
        """Add a catalog item; None if the item does not exist"""
        item = self.catalog.get_item(item_id)
        if not item:
            return None

        result = self.cart.add(item, quantity)
        if result.changed:
            self._changed()
        return result

    def update_quantity(self, item_id: str, delta: int) -> Optional[CartLine]:
        line = self.cart.get_line(item_id)
        if line is None or delta == 0:
            return line
        line = self.cart.update_quantity(item_id, delta)
        self._changed()
        return line

    def remove_item(self, item_id: str) -> bool:
        removed = self.cart.remove(item_id)
        if removed:
            self._changed()
        return removed

    def clear_cart(self) -> None:
        self.cart.clear()
        self._changed()

    def stock_issues(self) -> list[StockIssue]:
        return self.cart.stock_issues(self.catalog)

    def reconcile(self) -> list[StockIssue]:
        """Clamp cart lines to current stock"""
        adjusted = self.cart.reconcile(self.catalog)
        if adjusted:
            logger.info(f"Session {self.session_id}: reconciled {len(adjusted)} line(s) against stock")
            self._changed()
        return adjusted

    def set_destination(self, destination: Destination) -> None:
        self.destination = destination
        self.updated_at = _now()

    def set_notes(self, notes: str) -> None:
        self.notes = notes
        self.updated_at = _now()

    def pricing(self, destination: Optional[Destination] = None) -> PricingBreakdown:
        return calculate_pricing(self.cart.lines, destination or self.destination, self.rules)

    def checkout(
        self,
        destination: Optional[Destination] = None,
        notes: Optional[str] = None,
    ) -> Union[DirectPayment, ComposedMessage]:
        """Resolve checkout for the current cart; the caller dispatches the outcome"""
        destination = destination or self.destination
        return resolve_checkout(
            lines=self.cart.lines,
            items=self.catalog.items_by_id(),
            pricing=self.pricing(destination),
            destination=destination,
            notes=self.notes if notes is None else notes,
            brand_name=self.brand.name,
            brand_email=self.brand.email,
        )

    def to_cart(self) -> Cart:
        return Cart(
            cart_id=self.session_id,
            lines=[line.model_copy() for line in self.cart.lines],
            item_count=self.cart.item_count,
            destination=self.destination,
            notes=self.notes,
        )


class SessionManager:
    """Owns the shared catalog and the shoppers' sessions"""

    def __init__(
        self,
        brand: Brand,
        default_destination: Optional[Destination] = None,
        storage: Optional[Storage] = None,
        rules: RuleConfig = DEFAULT_RULES,
        max_session_age_hours: float = 24,
    ):
        self.brand = brand
        self.default_destination = default_destination or Destination()
        self.storage = storage if storage is not None else MemoryStorage()
        self.rules = rules
        self.max_session_age_hours = max_session_age_hours
        self.sessions: dict[str, ShopSession] = {}

        items = load_validated(self.storage, CATALOG_KEY, list[Item])
        self.catalog = CatalogStore(items)
        if items is None:
            logger.info("No stored catalog, starting from the initial items")
            self.save_catalog()

    def save_catalog(self) -> None:
        self.storage.save(CATALOG_KEY, self.catalog.to_list())

    def update_stock(self, item_id: str, quantity_change: int) -> bool:
        """Change an item's stock and persist the catalog"""
        updated = self.catalog.update_stock(item_id, quantity_change)
        if updated:
            self.save_catalog()
        return updated

    def _open_session(self, session_id: str) -> ShopSession:
        lines = load_validated(self.storage, cart_key(session_id), list[CartLine])
        session = ShopSession(
            session_id=session_id,
            catalog=self.catalog,
            storage=self.storage,
            brand=self.brand,
            destination=self.default_destination.model_copy(),
            rules=self.rules,
            cart=CartStore(lines),
        )
        self.sessions[session_id] = session
        return session

    def create_session(self) -> ShopSession:
        """Create a new session with an empty cart"""
        self.cleanup_old_sessions()
        session = self._open_session(str(uuid.uuid4()))
        self.storage.save(cart_key(session.session_id), session.cart.to_list())
        logger.info(f"Created session {session.session_id}")
        return session

    def get_session(self, session_id: str) -> Optional[ShopSession]:
        """Get session by ID, restoring a stored cart if the session is not loaded"""
        if session_id in self.sessions:
            session = self.sessions[session_id]
            session.updated_at = _now()
            return session
        if self.storage.load(cart_key(session_id)) is not None:
            return self._open_session(session_id)
        return None

    def delete_session(self, session_id: str) -> bool:
        """Unload a session; its stored cart is kept"""
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    def cleanup_old_sessions(self, max_age_hours: Optional[float] = None) -> int:
        """
        Unload sessions idle for longer than max_age_hours.

        Carts stay in storage and are restored on the next get_session;
        destination and notes fall back to the defaults.
        """
        if max_age_hours is None:
            max_age_hours = self.max_session_age_hours
        now = _now()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            self.delete_session(sid)
        if old_sessions:
            logger.info(f"Unloaded {len(old_sessions)} idle session(s)")
        return len(old_sessions)
