"""
admission_config -- single public entrypoint for pricing configuration.

Responsibility:
    Provides ``get_pricing_config()``, the only way the services obtain
    the default admission fee and related billing constants.  YAML
    loading is internal.

Failure modes:
    - ``FileNotFoundError`` -- the pricing file does not exist.
    - ``InvalidPricingConfigError`` -- missing or invalid values.

Audit relevance:
    Every successful call emits an ``ADMISSION_CONFIG_TRACE`` log entry
    carrying the fee, version and checksum, tying each opened admission
    back to the pricing that governed it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from admission_config.loader import load_yaml_file, parse_pricing_config
from admission_config.schema import PricingConfig

_logger = logging.getLogger("admission_kernel.config")

_DEFAULT_PRICING_FILE = Path(__file__).parent / "sets" / "pricing.yaml"

__all__ = ["PricingConfig", "get_pricing_config"]


def get_pricing_config(path: Path | None = None) -> PricingConfig:
    """Load and validate the pricing configuration.

    Args:
        path: Override path to a pricing YAML file. Defaults to
            admission_config/sets/pricing.yaml.
    """
    pricing_file = path or _DEFAULT_PRICING_FILE
    config = parse_pricing_config(load_yaml_file(pricing_file))

    _logger.info(
        "ADMISSION_CONFIG_TRACE",
        extra={
            "trace_type": "ADMISSION_CONFIG_TRACE",
            "source": str(pricing_file),
            "admission_fee": str(config.admission_fee),
            "currency": config.currency,
            "version": config.version,
            "checksum": config.checksum,
        },
    )
    return config
