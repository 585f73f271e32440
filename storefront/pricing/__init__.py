# Pricing and checkout engine

from .rules import (
    ShippingRule,
    TaxRule,
    RuleConfig,
    DEFAULT_RULES,
    SHIPPING_RULES,
    TAX_RULES,
    match_destination,
    select_shipping,
    select_tax,
)
from .calculator import calculate_pricing, calculate_subtotal, format_currency, format_percent
from .checkout import resolve_checkout

__all__ = [
    "ShippingRule",
    "TaxRule",
    "RuleConfig",
    "DEFAULT_RULES",
    "SHIPPING_RULES",
    "TAX_RULES",
    "match_destination",
    "select_shipping",
    "select_tax",
    "calculate_pricing",
    "calculate_subtotal",
    "format_currency",
    "format_percent",
    "resolve_checkout",
]
