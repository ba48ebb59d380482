"""Pricing rule overrides read from YAML or JSON."""

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.models.pricing import PricingConfig

PRICING_SECTIONS = ("cart", "checkout")


class ConfigurationError(Exception):
    """Raised when a configuration source is missing, unreadable or invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        if self.field:
            return f"Configuration error in field '{self.field}': {self.message}"
        return self.message


def _parse_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML format: {e}") from e


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON format: {e}") from e


_PARSERS: dict[str, Callable[[str], Any]] = {
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".json": _parse_json,
}


class PricingConfigLoader:
    """Loads the cart and checkout pricing rules from a YAML or JSON file.

    Expected shape:

    ```yaml
    cart:
      shipping: {fee: 500}
      tax: {rate: 0}
    checkout:
      shipping: {fee: 99, free_above: 999}
      tax: {rate: 0.18}
    ```

    Either section may be omitted; callers keep their defaults for it.
    """

    def __init__(self, config_file_path: str | Path | None = None) -> None:
        """Resolve the pricing file.

        Args:
            config_file_path: Path to the pricing file. Falls back to the
                STOREFRONT_PRICING_FILE environment variable.

        Raises:
            ConfigurationError: If no path is available or the file does not exist.
        """
        config_file_path = config_file_path or os.getenv("STOREFRONT_PRICING_FILE")
        if not config_file_path:
            raise ConfigurationError(
                "Pricing file path not provided and STOREFRONT_PRICING_FILE "
                "environment variable is not set"
            )
        self._config_path = Path(config_file_path)
        if not self._config_path.exists():
            raise ConfigurationError(f"Pricing file not found: {self._config_path}")

    @property
    def path(self) -> Path:
        return self._config_path

    def load_raw(self) -> dict[str, Any]:
        """Parse the file by its suffix. An empty document is an empty mapping."""
        suffix = self._config_path.suffix.lower()
        parser = _PARSERS.get(suffix)
        if parser is None:
            raise ConfigurationError(
                f"Unsupported configuration file format: {suffix}. "
                f"Supported formats: {', '.join(_PARSERS)}"
            )
        try:
            text = self._config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read pricing file: {e}") from e

        data = parser(text) if text.strip() else None
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError("Pricing file must contain a mapping of sections")
        return data

    def load(self) -> dict[str, PricingConfig]:
        """Validate each section present in the file.

        Returns:
            Mapping of section name ("cart", "checkout") to PricingConfig.

        Raises:
            ConfigurationError: If a section is malformed or unknown.
        """
        data = self.load_raw()
        unknown = sorted(set(data) - set(PRICING_SECTIONS))
        if unknown:
            raise ConfigurationError(
                f"Unknown pricing sections: {', '.join(unknown)}", field=unknown[0]
            )

        configs: dict[str, PricingConfig] = {}
        for section in PRICING_SECTIONS:
            if section not in data:
                continue
            raw = data[section] or {}
            if not isinstance(raw, dict):
                raise ConfigurationError("Pricing section must be a mapping", field=section)
            try:
                configs[section] = PricingConfig.model_validate(raw)
            except PydanticValidationError as e:
                raise ConfigurationError(f"Invalid pricing rules: {e}", field=section) from e
        return configs
