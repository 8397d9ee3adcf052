"""
Pricing configuration schema.

The human-authored source of the default admission fee and related
billing constants.  YAML fragments are parsed into these types by the
loader; the engines only ever see the resulting frozen values.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PricingConfig:
    """Billing constants supplied to the admission engines."""

    admission_fee: Decimal
    currency: str = "BDT"
    admission_number_prefix: str = "ADM"
    version: int = 1
    checksum: str = ""
