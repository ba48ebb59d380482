"""Cart and checkout price computation."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from storefront.domain.models.pricing import (
    PriceBreakdown,
    PricingConfig,
    ShippingRule,
    TaxRule,
)


def compute_totals(
    items: Iterable[Any],
    shipping_rule: ShippingRule,
    tax_rule: TaxRule,
    currency: str = "INR",
) -> PriceBreakdown:
    """Price a list of cart lines.

    Args:
        items: Objects (or mappings) with ``price`` and ``quantity``.
        shipping_rule: Fee and optional free-shipping threshold.
        tax_rule: Flat rate, rounded half-up to whole currency units.
        currency: ISO code carried onto the breakdown.

    Returns:
        PriceBreakdown where ``total = subtotal + shipping + tax``.

    Example:
        >>> from storefront.domain.models.pricing import CHECKOUT_PRICING
        >>> lines = [{"price": 500, "quantity": 2}, {"price": 300, "quantity": 1}]
        >>> compute_totals(lines, CHECKOUT_PRICING.shipping, CHECKOUT_PRICING.tax).total
        Decimal('1534')
    """
    subtotal = sum(
        (_decimal(_field(item, "price")) * int(_field(item, "quantity")) for item in items),
        Decimal("0"),
    )

    if shipping_rule.free_above is not None and subtotal > shipping_rule.free_above:
        shipping = Decimal("0")
    else:
        shipping = shipping_rule.fee

    tax = (subtotal * tax_rule.rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP)

    return PriceBreakdown(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
        currency=currency,
    )


def price_with(items: Iterable[Any], config: PricingConfig) -> PriceBreakdown:
    """``compute_totals`` with the rules of one pricing preset."""
    return compute_totals(items, config.shipping, config.tax, currency=config.currency)


def amount_to_free_shipping(subtotal: Decimal | float | int, threshold: Decimal | float | int) -> Decimal:
    """How much more must be added before shipping is free; 0 once it already is."""
    remaining = _decimal(threshold) - _decimal(subtotal)
    return remaining if remaining > 0 else Decimal("0")


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item[name]
    return getattr(item, name)


def _decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging in binary noise
    return Decimal(str(value))
