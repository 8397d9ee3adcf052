"""
Module: admission_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    admission billing engines.  This is the canonical import surface for
    the service layer.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import admission_kernel.domain and admission_kernel.logging_config
    (and sibling engine modules).

Invariants enforced:
    - Purity: engines never read the wall clock; time comes from an
      injected Clock.
    - Decimal-only arithmetic for monetary amounts.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from admission_engines import StatusTransitionEngine, compute_totals
    from admission_engines.validation import validate_creation
"""

from admission_kernel.logging_config import get_logger

logger = get_logger("engines")

from admission_engines.discount import (
    compute_discount,
    switch_type,
    with_value,
)
from admission_engines.editing import (
    AdmissionSession,
    apply_charge,
    apply_discount_kind,
    apply_discount_value,
    apply_paid_amount,
    open_admission,
)
from admission_engines.ledger import (
    coerce_charge,
    reset_to_default_fee,
    set_charge,
    subtotal,
    zero_all,
)
from admission_engines.status import (
    StatusTransitionEngine,
    selectable_statuses,
)
from admission_engines.totals import (
    compute_totals,
    recompute,
)
from admission_engines.validation import (
    FormatChecker,
    RegexFormatChecker,
    summarize_errors,
    validate_creation,
    validate_edit,
)

__all__ = [
    # Ledger
    "coerce_charge",
    "set_charge",
    "subtotal",
    "zero_all",
    "reset_to_default_fee",
    # Discount
    "compute_discount",
    "switch_type",
    "with_value",
    # Totals
    "compute_totals",
    "recompute",
    # Status
    "StatusTransitionEngine",
    "selectable_statuses",
    # Validation
    "FormatChecker",
    "RegexFormatChecker",
    "validate_creation",
    "validate_edit",
    "summarize_errors",
    # Editing
    "AdmissionSession",
    "open_admission",
    "apply_charge",
    "apply_discount_kind",
    "apply_discount_value",
    "apply_paid_amount",
]

logger.debug("engines_package_loaded", extra={
    "modules": ["ledger", "discount", "totals", "status", "validation", "editing"],
})
