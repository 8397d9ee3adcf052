"""
Charge Ledger Engine.

Pure functions with deterministic behavior. No I/O.

Stores the ten itemized charge fields of an admission and exposes the
pre-discount subtotal.  Every function returns a new ChargeSet; callers
recompute the admission totals afterwards (see ``admission_engines.totals``).

Input policy:
    - Non-numeric, empty, boolean or non-finite input coerces to 0.
    - Negative input coerces to 0 as well.  A charge is never a credit;
      reductions go through the discount rule.

Usage:
    from admission_engines.ledger import set_charge, subtotal

    charges = ChargeSet.initial(Decimal("300"))
    charges = set_charge(charges, "service_charge", "500")
    subtotal(charges)   # Decimal("800")
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from admission_engines.tracer import traced_engine
from admission_kernel.domain.admission import ChargeSet
from admission_kernel.domain.values import ZERO, ChargeField, coerce_amount
from admission_kernel.logging_config import get_logger

logger = get_logger("engines.ledger")


def coerce_charge(raw_value: Any) -> Decimal:
    """Coerce raw form input into a non-negative charge amount."""
    amount = coerce_amount(raw_value)
    if amount < 0:
        logger.debug("negative_charge_coerced", extra={"raw_value": str(raw_value)})
        return ZERO
    return amount


def set_charge(
    charges: ChargeSet,
    charge_field: ChargeField | str,
    raw_value: Any,
) -> ChargeSet:
    """
    Set one charge field from raw input.

    Raises:
        UnknownChargeFieldError: If the field does not name a ChargeSet field.
    """
    resolved = ChargeField.parse(charge_field)
    amount = coerce_charge(raw_value)

    logger.debug("charge_set", extra={
        "field": resolved.value,
        "raw_value": str(raw_value),
        "amount": str(amount),
    })

    return charges.with_amount(resolved, amount)


@traced_engine("ledger", "1.0", fingerprint_fields=("charges",))
def subtotal(charges: ChargeSet) -> Decimal:
    """Sum of all ten charge fields, including the admission fee."""
    return charges.total()


def zero_all(charges: ChargeSet) -> ChargeSet:
    """Set every field, including the admission fee, to zero."""
    logger.info("charges_zeroed", extra={
        "previous_subtotal": str(charges.total()),
    })
    return ChargeSet()


def reset_to_default_fee(charges: ChargeSet, default_fee: Decimal) -> ChargeSet:
    """Restore the admission fee to the configured default.

    The other nine fields keep whatever value they currently hold.
    """
    logger.info("admission_fee_restored", extra={
        "default_fee": str(default_fee),
        "previous_fee": str(charges.admission_fee),
    })
    return charges.with_amount(ChargeField.ADMISSION_FEE, default_fee)
