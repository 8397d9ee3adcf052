"""
Admission Totals Engine.

Pure functions with deterministic behavior. No I/O.

Derives the four dependent amounts of an admission from its current
charges, discount rule and paid amount.  Recomputation is a pure
function of those inputs: running it twice without a mutation in
between yields identical totals.

    total_amount    = sum of the ten charge fields
    discount_amount = compute_discount(discount, total_amount)
    grand_total     = total_amount - discount_amount
    due_amount      = grand_total - paid_amount   (negative = refund owed)
"""

from __future__ import annotations

from decimal import Decimal

from admission_engines.discount import compute_discount
from admission_engines.ledger import subtotal
from admission_engines.tracer import traced_engine
from admission_kernel.domain.admission import Admission, ChargeSet
from admission_kernel.domain.dtos import BillingTotals
from admission_kernel.domain.values import DiscountSpec
from admission_kernel.logging_config import get_logger

logger = get_logger("engines.totals")


@traced_engine(
    "totals", "1.0",
    fingerprint_fields=("charges", "discount", "paid_amount"),
)
def compute_totals(
    charges: ChargeSet,
    discount: DiscountSpec,
    paid_amount: Decimal,
) -> BillingTotals:
    """Compute the derived totals for one admission state."""
    total_amount = subtotal(charges)
    discount_amount = compute_discount(discount, total_amount)
    grand_total = total_amount - discount_amount
    due_amount = grand_total - paid_amount

    return BillingTotals(
        total_amount=total_amount,
        discount_amount=discount_amount,
        grand_total=grand_total,
        due_amount=due_amount,
    )


def recompute(admission: Admission) -> Admission:
    """Return the admission with its derived totals brought up to date."""
    totals = compute_totals(admission.charges, admission.discount, admission.paid_amount)

    if totals != admission.totals:
        logger.debug("totals_recomputed", extra={
            "admission_number": admission.admission_number,
            "total_amount": str(totals.total_amount),
            "discount_amount": str(totals.discount_amount),
            "grand_total": str(totals.grand_total),
            "due_amount": str(totals.due_amount),
        })

    return admission.with_totals(totals)
