"""Async client for the storefront REST API."""

from storefront.client import StorefrontClient

__all__ = ["StorefrontClient"]
