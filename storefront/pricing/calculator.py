"""Order pricing: subtotal, shipping, tax and total"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ..models.cart import CartLine
from ..models.checkout import (
    Destination,
    PricedLine,
    PricingBreakdown,
    PricingDisplay,
    ShippingCharge,
    TaxCharge,
)
from .rules import DEFAULT_RULES, RuleConfig

CENTS = Decimal("0.01")


def format_currency(amount: Decimal) -> str:
    """Render an amount as dollars, rounding half up to cents"""
    return f"${amount.quantize(CENTS, rounding=ROUND_HALF_UP)}"


def format_percent(percent: Decimal) -> str:
    """Render a 0-1 rate with one decimal, e.g. 0.102 -> 10.2%"""
    return f"{(percent * 100).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"


def calculate_subtotal(lines: Iterable[CartLine]) -> Decimal:
    return sum((line.line_total for line in lines), Decimal("0"))


def calculate_pricing(
    lines: Iterable[CartLine],
    destination: Destination,
    rules: RuleConfig = DEFAULT_RULES,
) -> PricingBreakdown:
    """
    Price a cart for a destination.

    Args:
        lines: Cart lines with their snapshot prices
        destination: Where the order ships, used to pick the tax rule
        rules: Shipping and tax tables

    Returns:
        Exact breakdown plus rounded display strings
    """
    lines = list(lines)
    subtotal = calculate_subtotal(lines)

    shipping_rule = rules.select_shipping(subtotal)
    tax_rule = rules.select_tax(destination)
    tax_amount = subtotal * tax_rule.percent if tax_rule else Decimal("0")
    total = subtotal + shipping_rule.rate + tax_amount

    tax = None
    if tax_rule:
        tax = TaxCharge(
            rule_id=tax_rule.id,
            label=tax_rule.label,
            percent=tax_rule.percent,
            amount=tax_amount,
        )

    return PricingBreakdown(
        lines=[
            PricedLine(
                item_id=line.item_id,
                name=line.name,
                price=line.price,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in lines
        ],
        subtotal=subtotal,
        shipping=ShippingCharge(
            rule_id=shipping_rule.id,
            label=shipping_rule.label,
            amount=shipping_rule.rate,
        ),
        tax=tax,
        tax_amount=tax_amount,
        total=total,
        display=PricingDisplay(
            subtotal=format_currency(subtotal),
            shipping=format_currency(shipping_rule.rate),
            tax=format_currency(tax_amount) if tax_rule else None,
            total=format_currency(total),
        ),
    )
