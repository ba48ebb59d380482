"""Configuration settings using pydantic-settings."""

from decimal import Decimal
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.domain.models.pricing import PricingConfig, ShippingRule, TaxRule


class StorefrontSettings(BaseSettings):
    """Configuration settings for the storefront client.

    Settings can be loaded from environment variables, a ``.env`` file, or
    passed as a dictionary. Environment variables are prefixed with
    ``STOREFRONT_`` (e.g., ``STOREFRONT_API_URL=https://shop.example/api``).

    Example:
        ```python
        settings = StorefrontSettings()
        settings = StorefrontSettings(api_url="http://localhost:5000/api")
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # HTTP client
    api_url: str = Field(
        default="http://localhost:5000/api",
        description="Base URL of the storefront REST API",
    )
    login_path: str = Field(
        default="/login",
        description="Route the client is sent to when the backend answers 401",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        description="Per-request timeout; None leaves calls unbounded",
        gt=0,
    )

    # Session persistence
    session_file: str | None = Field(
        default=None,
        description="Encrypted session file; when unset the session lives in memory only",
    )
    encryption_key: str | None = Field(
        default=None,
        description="Fernet key or passphrase protecting the session file",
    )

    # Pricing
    pricing_file: str | None = Field(
        default=None,
        description="YAML/JSON file with 'cart' and 'checkout' pricing sections",
    )
    cart_shipping_fee: Decimal = Field(default=Decimal("500"), ge=0)
    cart_tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    checkout_shipping_fee: Decimal = Field(default=Decimal("99"), ge=0)
    checkout_free_shipping_above: Decimal | None = Field(default=Decimal("999"), ge=0)
    checkout_tax_rate: Decimal = Field(default=Decimal("0.18"), ge=0, le=1)
    currency: str = Field(default="INR")

    # Observability configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        description="JSON log lines when True, console output when False",
    )

    def cart_pricing(self) -> PricingConfig:
        return PricingConfig(
            shipping=ShippingRule(fee=self.cart_shipping_fee),
            tax=TaxRule(rate=self.cart_tax_rate),
            currency=self.currency,
        )

    def checkout_pricing(self) -> PricingConfig:
        return PricingConfig(
            shipping=ShippingRule(
                fee=self.checkout_shipping_fee,
                free_above=self.checkout_free_shipping_above,
            ),
            tax=TaxRule(rate=self.checkout_tax_rate),
            currency=self.currency,
        )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "StorefrontSettings":
        """Create settings from a dictionary."""
        return cls(**config)
