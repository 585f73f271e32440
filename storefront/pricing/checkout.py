"""
Checkout resolution.

Decides whether a cart can be paid through the items' own payment links or
whether an order message has to be composed for the seller. Nothing is opened
or sent here; the caller dispatches the outcome.
"""

import logging
from typing import Iterable, Optional, Union
from urllib.parse import quote

from ..models.cart import CartLine
from ..models.checkout import ComposedMessage, Destination, DirectPayment, PricingBreakdown
from ..models.product import Item
from .calculator import format_currency, format_percent

logger = logging.getLogger(__name__)


def resolve_payment_links(
    lines: Iterable[CartLine],
    items: dict[str, Item],
) -> Optional[list[str]]:
    """Payment links in cart order, or None if any item lacks one"""
    links = []
    for line in lines:
        item = items.get(line.item_id)
        if item is None or not item.has_payment_link:
            return None
        links.append(item.payment_link)
    return links


def compose_order_body(
    lines: Iterable[CartLine],
    pricing: PricingBreakdown,
    destination: Destination,
    notes: str,
    brand_name: str,
) -> str:
    """Plain-text order summary addressed to the seller"""
    body = [
        f"Hello {brand_name},",
        "",
        "I'd like to place this order:",
    ]
    body.extend(
        f"• {line.name} ×{line.quantity} — {format_currency(line.line_total)}"
        for line in lines
    )
    body.append(f"Subtotal: {format_currency(pricing.subtotal)}")
    body.append(f"Shipping: {pricing.shipping.label} {format_currency(pricing.shipping.amount)}")
    if pricing.tax:
        body.append(
            f"{pricing.tax.label} ({format_percent(pricing.tax.percent)}): "
            f"{format_currency(pricing.tax.amount)}"
        )
    body.append(f"Total: {format_currency(pricing.total)}")
    body.extend(["", f"Notes: {notes}", "", f"Ship to: {destination.summary()}"])
    return "\n".join(body)


def build_mailto_url(recipient: str, subject: str, body: str) -> str:
    """mailto: link that opens a mail composer with the order filled in"""
    body = body.replace("\n", "\r\n")
    return f"mailto:{recipient}?subject={quote(subject)}&body={quote(body)}"


def resolve_checkout(
    lines: Iterable[CartLine],
    items: dict[str, Item],
    pricing: PricingBreakdown,
    destination: Destination,
    notes: str,
    brand_name: str,
    brand_email: str,
) -> Union[DirectPayment, ComposedMessage]:
    """
    Resolve a checkout attempt.

    Args:
        lines: Cart lines in insertion order
        items: Catalog items keyed by id
        pricing: Breakdown for the same lines, used only for the message
        destination: Ship-to address for the message
        notes: Free-text shopper notes
        brand_name: Seller name used in greeting and subject
        brand_email: Seller address the message goes to

    Returns:
        DirectPayment when every item has a payment link (an empty cart
        qualifies), otherwise ComposedMessage
    """
    lines = list(lines)

    links = resolve_payment_links(lines, items)
    if links is not None:
        logger.info(f"Checkout resolved to {len(links)} payment link(s)")
        return DirectPayment(payment_links=links)

    subject = f"Order from {brand_name}"
    body = compose_order_body(lines, pricing, destination, notes, brand_name)
    logger.info(
        f"Checkout resolved to order message for {len(lines)} line(s), "
        f"total {format_currency(pricing.total)}"
    )
    return ComposedMessage(
        recipient=brand_email,
        subject=subject,
        body=body,
        mailto_url=build_mailto_url(brand_email, subject, body),
    )
