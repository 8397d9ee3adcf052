"""
Discount Policy Engine.

Pure functions with deterministic behavior. No I/O.

Interprets a DiscountSpec against a subtotal:

    None, or a kind with no value  -> 0
    Percentage(v)                  -> subtotal * v / 100  (half-up, 2 places)
    Fixed(v)                       -> v

The result is always clamped into [0, subtotal].  Percentages above 100
and negative values are accepted as input; the clamp keeps the outcome
inside the invariant.

Switching the kind keeps the raw number: Percentage(10) switched to
FIXED is Fixed(10), not a converted amount.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from admission_engines.tracer import traced_engine
from admission_kernel.domain.values import (
    HUNDRED,
    TWO_PLACES,
    ZERO,
    DiscountKind,
    DiscountSpec,
    coerce_amount,
)
from admission_kernel.exceptions import UnknownDiscountKindError
from admission_kernel.logging_config import get_logger

logger = get_logger("engines.discount")


@traced_engine("discount", "1.0", fingerprint_fields=("spec", "subtotal"))
def compute_discount(spec: DiscountSpec, subtotal: Decimal) -> Decimal:
    """Convert a DiscountSpec and subtotal into a bounded discount amount."""
    if not spec.is_active:
        return ZERO

    if spec.kind is DiscountKind.PERCENTAGE:
        raw = (subtotal * spec.value / HUNDRED).quantize(
            TWO_PLACES, rounding=ROUND_HALF_UP
        )
    elif spec.kind is DiscountKind.FIXED:
        raw = spec.value
    else:
        raise UnknownDiscountKindError(str(spec.kind))

    clamped = max(min(raw, subtotal), ZERO)
    if clamped != raw:
        logger.info("discount_clamped", extra={
            "kind": spec.kind.value,
            "value": str(spec.value),
            "requested": str(raw),
            "subtotal": str(subtotal),
            "applied": str(clamped),
        })
    return clamped


def switch_type(spec: DiscountSpec, new_kind: DiscountKind | str | None) -> DiscountSpec:
    """Change the discount tag while preserving the raw value."""
    kind = DiscountKind.parse(new_kind)
    logger.debug("discount_kind_switched", extra={
        "from_kind": spec.kind.value,
        "to_kind": kind.value,
        "value": str(spec.value) if spec.value is not None else None,
    })
    return spec.with_kind(kind)


def with_value(spec: DiscountSpec, raw_value: Any) -> DiscountSpec:
    """Set the discount value from raw input.

    Empty input clears the value (the kind stays selected); anything else
    goes through the same coercion as charges, sign preserved.
    """
    if raw_value is None or (isinstance(raw_value, str) and not raw_value.strip()):
        return spec.with_value(None)
    return spec.with_value(coerce_amount(raw_value))
