"""
Shipping and tax rule tables.

Edit the tables below to change what the storefront charges. Tax rules are
tried in order and the first match wins, so list city rules before the state
rule that would also match them.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..models.checkout import Destination


@dataclass(frozen=True)
class ShippingRule:
    """Flat rate that applies once the subtotal reaches min_subtotal"""
    id: str
    label: str
    min_subtotal: Decimal
    rate: Decimal


@dataclass(frozen=True)
class TaxRule:
    """Percentage charge for destinations matching applies_to"""
    id: str
    label: str
    percent: Decimal  # 0.102 == 10.2%
    applies_to: Callable[[Destination], bool]


def match_destination(
    country: Optional[str] = None,
    state: Optional[str] = None,
    city: Optional[str] = None,
    postal_prefix: Optional[str] = None,
) -> Callable[[Destination], bool]:
    """
    Build a destination predicate.

    Country and state compare exactly, city ignores case, postal_prefix
    matches the start of the postal code. Omitted fields match anything.
    """

    def predicate(destination: Destination) -> bool:
        if country is not None and destination.country != country:
            return False
        if state is not None and destination.state != state:
            return False
        if city is not None and destination.city.lower() != city.lower():
            return False
        if postal_prefix is not None and not destination.postal_code.startswith(postal_prefix):
            return False
        return True

    return predicate


SHIPPING_RULES: tuple[ShippingRule, ...] = (
    ShippingRule(
        id="free_over_75",
        label="Free (orders $75+)",
        min_subtotal=Decimal("75"),
        rate=Decimal("0"),
    ),
    ShippingRule(
        id="standard_under_75",
        label="Standard shipping",
        min_subtotal=Decimal("0"),
        rate=Decimal("8"),
    ),
)

# Verify local rates before launch
TAX_RULES: tuple[TaxRule, ...] = (
    TaxRule(
        id="wa_tacoma",
        label="Tacoma, WA sales tax",
        percent=Decimal("0.102"),
        applies_to=match_destination(country="US", state="WA", city="tacoma"),
    ),
    TaxRule(
        id="wa_statewide_fallback",
        label="Washington (fallback)",
        percent=Decimal("0.095"),
        applies_to=match_destination(country="US", state="WA"),
    ),
)


def select_shipping(
    subtotal: Decimal,
    rules: Sequence[ShippingRule] = SHIPPING_RULES,
) -> ShippingRule:
    """
    Cheapest rule whose threshold the subtotal meets; ties keep declaration order.

    An empty table falls back to SHIPPING_RULES. When no rule qualifies the
    first rule applies.
    """
    if not rules:
        rules = SHIPPING_RULES
    qualifying = [r for r in rules if subtotal >= r.min_subtotal]
    if not qualifying:
        return rules[0]
    # min() returns the first of equal minima
    return min(qualifying, key=lambda r: r.rate)


def select_tax(
    destination: Destination,
    rules: Sequence[TaxRule] = TAX_RULES,
) -> Optional[TaxRule]:
    """First rule matching the destination, or None"""
    return next((r for r in rules if r.applies_to(destination)), None)


@dataclass(frozen=True)
class RuleConfig:
    """Shipping and tax tables consumed by the pricing calculator"""
    shipping_rules: tuple[ShippingRule, ...] = SHIPPING_RULES
    tax_rules: tuple[TaxRule, ...] = TAX_RULES

    def __post_init__(self):
        if not any(r.min_subtotal <= 0 for r in self.shipping_rules):
            raise ValueError("At least one shipping rule must have a zero minimum subtotal")

    def select_shipping(self, subtotal: Decimal) -> ShippingRule:
        return select_shipping(subtotal, self.shipping_rules)

    def select_tax(self, destination: Destination) -> Optional[TaxRule]:
        return select_tax(destination, self.tax_rules)


DEFAULT_RULES = RuleConfig()
