"""
Configuration Loader (``admission_config.loader``).

Responsibility
--------------
Loads the pricing YAML file and parses it into a ``PricingConfig``.
The public runtime entry point is ``admission_config.get_pricing_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing or invalid values  -> ``InvalidPricingConfigError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from admission_config.schema import PricingConfig
from admission_kernel.domain.values import TWO_PLACES
from admission_kernel.exceptions import InvalidPricingConfigError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_fee(value: Any) -> Decimal:
    """Parse a non-negative fee from YAML (int, float or string)."""
    if value is None or isinstance(value, bool):
        raise InvalidPricingConfigError("admission_fee", "value is required")
    try:
        fee = Decimal(str(value))
    except InvalidOperation:
        raise InvalidPricingConfigError(
            "admission_fee", f"not a number: {value!r}"
        ) from None
    if not fee.is_finite() or fee < 0:
        raise InvalidPricingConfigError("admission_fee", f"must be >= 0, got {value!r}")
    return fee.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_pricing_config(data: dict[str, Any]) -> PricingConfig:
    """
    Parse a ``PricingConfig`` from a dict.

    Expected shape::

        pricing:
          admission_fee: 300
          currency: BDT
          admission_number_prefix: ADM
        version: 1
    """
    pricing = data.get("pricing")
    if not isinstance(pricing, dict):
        raise InvalidPricingConfigError("pricing", "section is missing")

    currency = str(pricing.get("currency", "BDT")).strip().upper()
    if len(currency) != 3 or not currency.isalpha():
        raise InvalidPricingConfigError("currency", f"not a 3-letter code: {currency!r}")

    prefix = str(pricing.get("admission_number_prefix", "ADM")).strip()
    if not prefix:
        raise InvalidPricingConfigError("admission_number_prefix", "must not be empty")

    return PricingConfig(
        admission_fee=parse_fee(pricing.get("admission_fee")),
        currency=currency,
        admission_number_prefix=prefix,
        version=int(data.get("version", 1)),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization (deterministic)."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
