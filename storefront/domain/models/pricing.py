"""Pricing rule and breakdown models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShippingRule(BaseModel):
    """Shipping fee, waived when the subtotal is strictly above ``free_above``."""

    fee: Decimal = Field(default=Decimal("0"), ge=0)
    free_above: Decimal | None = Field(
        default=None,
        ge=0,
        description="Subtotal threshold above which shipping is free; None disables the waiver",
    )

    model_config = ConfigDict(frozen=True)


class TaxRule(BaseModel):
    """Flat tax rate applied to the subtotal and rounded half-up to whole units."""

    rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)

    model_config = ConfigDict(frozen=True)


class PricingConfig(BaseModel):
    """Shipping and tax rules applied by one view."""

    shipping: ShippingRule = Field(default_factory=ShippingRule)
    tax: TaxRule = Field(default_factory=TaxRule)
    currency: str = Field(default="INR", min_length=3, max_length=3)

    model_config = ConfigDict(frozen=True)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return v.upper()


class PriceBreakdown(BaseModel):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    currency: str = "INR"

    model_config = ConfigDict(frozen=True)

    @property
    def free_shipping(self) -> bool:
        return self.shipping == 0


# The cart page charges a flat fee with no tax; checkout charges 99 below the
# 999 threshold plus 18% tax. The two disagree for the same cart.
CART_PRICING = PricingConfig(
    shipping=ShippingRule(fee=Decimal("500")),
    tax=TaxRule(rate=Decimal("0")),
)
CHECKOUT_PRICING = PricingConfig(
    shipping=ShippingRule(fee=Decimal("99"), free_above=Decimal("999")),
    tax=TaxRule(rate=Decimal("0.18")),
)
FREE_SHIPPING_HINT_THRESHOLD = Decimal("999")
