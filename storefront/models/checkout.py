"""Pricing and checkout models for the storefront"""

from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field
from typing import Annotated, Literal, Optional, Union


class Destination(BaseModel):
    """Shipping destination; free-form, only used to pick a tax rule"""
    country: str = ""
    state: str = ""
    city: str = ""
    postal_code: str = ""

    def summary(self) -> str:
        return f"{self.city}, {self.state} {self.postal_code}, {self.country}"


class PricedLine(BaseModel):
    item_id: str
    name: str
    price: Decimal
    quantity: int
    line_total: Decimal


class ShippingCharge(BaseModel):
    rule_id: str
    label: str
    amount: Decimal


class TaxCharge(BaseModel):
    rule_id: str
    label: str
    percent: Decimal
    amount: Decimal


class PricingDisplay(BaseModel):
    """Breakdown figures rounded for rendering"""
    subtotal: str
    shipping: str
    tax: Optional[str] = None
    total: str


class PricingBreakdown(BaseModel):
    """Order totals derived from a cart, a destination and the rule tables.

    Amounts are exact; only ``display`` is rounded.
    """
    lines: list[PricedLine] = []
    subtotal: Decimal
    shipping: ShippingCharge
    tax: Optional[TaxCharge] = None
    tax_amount: Decimal
    total: Decimal
    display: PricingDisplay


class CheckoutKind(str, Enum):
    DIRECT_PAYMENT = "direct_payment"
    COMPOSED_MESSAGE = "composed_message"


class DirectPayment(BaseModel):
    """Every item carries a payment link; open each one"""
    kind: Literal[CheckoutKind.DIRECT_PAYMENT] = CheckoutKind.DIRECT_PAYMENT
    payment_links: list[str] = []


class ComposedMessage(BaseModel):
    """Order summary to send to the seller"""
    kind: Literal[CheckoutKind.COMPOSED_MESSAGE] = CheckoutKind.COMPOSED_MESSAGE
    recipient: str
    subject: str
    body: str
    mailto_url: str


CheckoutOutcome = Annotated[
    Union[DirectPayment, ComposedMessage],
    Field(discriminator="kind"),
]


class CheckoutRequest(BaseModel):
    """Request to checkout"""
    cart_id: str
    # Overrides the destination/notes stored on the cart when given
    destination: Optional[Destination] = None
    notes: Optional[str] = None


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    outcome: CheckoutOutcome
    pricing: PricingBreakdown


class ShippingRuleView(BaseModel):
    id: str
    label: str
    min_subtotal: Decimal
    rate: Decimal


class TaxRuleView(BaseModel):
    id: str
    label: str
    percent: Decimal


class RuleTablesResponse(BaseModel):
    shipping: list[ShippingRuleView]
    tax: list[TaxRuleView]
