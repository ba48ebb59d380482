"""Configuration infrastructure module."""

from storefront.infrastructure.config.file_loader import (
    ConfigurationError,
    PricingConfigLoader,
)
from storefront.infrastructure.config.settings import StorefrontSettings

__all__ = [
    "StorefrontSettings",
    "PricingConfigLoader",
    "ConfigurationError",
]
