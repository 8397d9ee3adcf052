"""
Status Transition Engine.

Owns the lifecycle status of an admission and applies the charge side
effects attached to the Canceled state.

The transition graph is deliberately unrestricted: any status may move
to any other (administrative override).  A single guard sits around the
Canceled edges:

    into Canceled       -> zero every charge, drop the discount rule,
                           annotate the remarks on the first entry,
                           advise a manual refund when money has been
                           collected
    out of Canceled     -> restore the configured admission fee only
    anything else       -> status change only
    into Discharged     -> stamp date_discharged (edge only)

Every branch finishes with a full totals recomputation, so the billing
invariants hold on the returned admission.  Advisories are returned as
data; nothing here raises for a recoverable condition.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from admission_engines.ledger import reset_to_default_fee, zero_all
from admission_engines.totals import recompute
from admission_kernel.domain.admission import Admission
from admission_kernel.domain.clock import Clock, SystemClock
from admission_kernel.domain.dtos import (
    MANUAL_REFUND_REQUIRED,
    Advisory,
    TransitionOutcome,
)
from admission_kernel.domain.values import ZERO, AdmissionStatus, DiscountSpec
from admission_kernel.logging_config import get_logger

logger = get_logger("engines.status")

CANCELED_REMARK_PREFIX = "[CANCELED]"
CANCELED_REMARK_SUFFIX = " - Previous charges refunded"


def selectable_statuses() -> tuple[AdmissionStatus, ...]:
    """Statuses offered in the normal status dropdown.

    Canceled is reached through the dedicated cancel action instead.
    """
    return tuple(s for s in AdmissionStatus if s is not AdmissionStatus.CANCELED)


class StatusTransitionEngine:
    """
    Applies status transitions and their side effects.

    Contract:
        Receives the configured default admission fee (used on restoration)
        and a Clock (used for the discharge stamp).  Never mutates its
        input; returns a TransitionOutcome with the next admission value.
    """

    def __init__(
        self,
        default_fee: Decimal,
        clock: Clock | None = None,
        currency: str = "BDT",
    ):
        self._default_fee = default_fee
        self._clock = clock or SystemClock()
        self._currency = currency

    @property
    def default_fee(self) -> Decimal:
        return self._default_fee

    def request_status(
        self,
        admission: Admission,
        new_status: AdmissionStatus | str,
    ) -> TransitionOutcome:
        """Move the admission to ``new_status``, applying side effects."""
        target = AdmissionStatus.parse(new_status)
        previous = admission.status
        advisories: list[Advisory] = []
        charges = admission.charges
        discount = admission.discount
        remarks = admission.remarks

        if target is AdmissionStatus.CANCELED:
            # Repeated cancellation re-zeroes an already empty ledger.
            charges = zero_all(charges)
            discount = DiscountSpec.none()
            if previous is not AdmissionStatus.CANCELED:
                remarks = _canceled_remarks(admission.remarks)
            if admission.paid_amount > ZERO:
                advisories.append(self._refund_advisory(admission))
        elif previous is AdmissionStatus.CANCELED:
            charges = reset_to_default_fee(charges, self._default_fee)

        date_discharged = admission.date_discharged
        if target is AdmissionStatus.DISCHARGED and previous is not AdmissionStatus.DISCHARGED:
            date_discharged = self._clock.now()
        elif target is not AdmissionStatus.DISCHARGED:
            date_discharged = None

        next_admission = recompute(replace(
            admission,
            status=target,
            charges=charges,
            discount=discount,
            date_discharged=date_discharged,
            remarks=remarks,
        ))

        logger.info("admission_status_changed", extra={
            "admission_number": admission.admission_number,
            "from_status": previous.value,
            "to_status": target.value,
            "grand_total": str(next_admission.grand_total),
            "due_amount": str(next_admission.due_amount),
            "advisory_codes": [a.code for a in advisories],
        })

        return TransitionOutcome(
            admission=next_admission,
            previous_status=previous,
            advisories=tuple(advisories),
        )

    def cancel(self, admission: Admission) -> TransitionOutcome:
        """Dedicated cancel action, the same as ``request_status(CANCELED)``."""
        return self.request_status(admission, AdmissionStatus.CANCELED)

    def describe_transition(
        self,
        current: AdmissionStatus | str,
        new: AdmissionStatus | str,
        patient_name: str,
    ) -> str:
        """Confirmation text shown before a status change is applied."""
        current_status = AdmissionStatus.parse(current)
        new_status = AdmissionStatus.parse(new)

        if new_status is AdmissionStatus.CANCELED:
            return (
                f"Canceling admission for {patient_name} will set all charges to "
                f"{self._currency} 0. You must refund any paid amount to the patient."
            )
        if current_status is AdmissionStatus.CANCELED:
            return (
                f"Restoring {patient_name}'s admission will set the admission fee to "
                f"{self._currency} {self._default_fee}. Other charges will remain at "
                f"{self._currency} 0."
            )
        return (
            f'Are you sure you want to change {patient_name}\'s status from '
            f'"{current_status.value}" to "{new_status.value}"?'
        )

    def _refund_advisory(self, admission: Admission) -> Advisory:
        logger.warning("manual_refund_required", extra={
            "admission_number": admission.admission_number,
            "paid_amount": str(admission.paid_amount),
        })
        return Advisory(
            code=MANUAL_REFUND_REQUIRED,
            message=(
                f"Admission canceled with {self._currency} {admission.paid_amount} "
                f"collected; refund the patient manually."
            ),
            details={"paid_amount": str(admission.paid_amount)},
        )


def _canceled_remarks(remarks: str) -> str:
    return f"{CANCELED_REMARK_PREFIX} {remarks}".rstrip() + CANCELED_REMARK_SUFFIX
