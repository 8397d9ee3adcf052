"""
Admission editing -- mutators over the Admission aggregate.

Each function takes the current admission value and returns the next one
with its totals recomputed; there is no intermediate state in which a
field has changed but the totals have not.  ``AdmissionSession`` is the
single owner of one admission value during an editing session and
forwards to these functions.

Usage:
    session = AdmissionSession(admission, transitions)
    session.set_charge("service_charge", "500")
    session.set_discount_kind("percentage")
    session.set_discount_value(10)
    session.admission.grand_total    # Decimal("720.00")
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any

from admission_engines import discount as discount_policy
from admission_engines.ledger import coerce_charge, set_charge
from admission_engines.status import StatusTransitionEngine
from admission_engines.totals import recompute
from admission_engines.validation import validate_edit
from admission_kernel.domain.admission import Admission, ChargeSet
from admission_kernel.domain.clock import Clock
from admission_kernel.domain.dtos import Advisory, TransitionOutcome, ValidationResult
from admission_kernel.domain.intake import AdmissionIntake
from admission_kernel.domain.values import (
    AdmissionStatus,
    ChargeField,
    DiscountKind,
    DiscountSpec,
)
from admission_kernel.logging_config import get_logger

logger = get_logger("engines.editing")


def open_admission(
    intake: AdmissionIntake,
    *,
    admission_fee: Decimal,
    clock: Clock,
    admission_number: str | None = None,
    admitted_at: datetime | None = None,
) -> Admission:
    """Build a new admission: status Admitted, default fee, no discount, nothing paid.

    ``admitted_at`` overrides the clock so a caller that already derived the
    admission number from a timestamp can stamp the same instant.
    """
    admission = Admission(
        date_admitted=admitted_at if admitted_at is not None else clock.now(),
        admission_number=admission_number,
        patient_id=intake.patient_id,
        hospital_id=intake.hospital_id,
        department_id=intake.department_id,
        doctor_id=intake.doctor_id,
        status=AdmissionStatus.ADMITTED,
        charges=ChargeSet.initial(admission_fee),
        discount=DiscountSpec.none(),
        seat_number=intake.seat_number,
        ward=intake.ward,
        diagnosis=intake.diagnosis,
        treatment=intake.treatment,
        ot_type=intake.ot_type,
        remarks=intake.remarks,
        chief_complaint=intake.chief_complaint,
    )
    logger.info("admission_opened", extra={
        "admission_id": str(admission.id),
        "admission_number": admission_number,
        "admission_fee": str(admission_fee),
    })
    return recompute(admission)


def apply_charge(admission: Admission, charge_field: ChargeField | str, raw_value: Any) -> Admission:
    return recompute(replace(
        admission, charges=set_charge(admission.charges, charge_field, raw_value),
    ))


def apply_discount_kind(admission: Admission, kind: DiscountKind | str | None) -> Admission:
    return recompute(replace(
        admission, discount=discount_policy.switch_type(admission.discount, kind),
    ))


def apply_discount_value(admission: Admission, raw_value: Any) -> Admission:
    return recompute(replace(
        admission, discount=discount_policy.with_value(admission.discount, raw_value),
    ))


def apply_paid_amount(admission: Admission, raw_value: Any) -> Admission:
    """Set cash collected to date; negative or non-numeric input becomes 0."""
    return recompute(replace(admission, paid_amount=coerce_charge(raw_value)))


class AdmissionSession:
    """
    Single owner of the admission being edited.

    Holds exactly one Admission value; every mutator swaps it for the next
    fully recomputed value.  Advisories from the most recent status change
    are kept until the next one.
    """

    def __init__(self, admission: Admission, transitions: StatusTransitionEngine):
        self._admission = admission
        self._transitions = transitions
        self._advisories: tuple[Advisory, ...] = ()

    @property
    def admission(self) -> Admission:
        return self._admission

    @property
    def advisories(self) -> tuple[Advisory, ...]:
        return self._advisories

    def set_charge(self, charge_field: ChargeField | str, raw_value: Any) -> Admission:
        self._admission = apply_charge(self._admission, charge_field, raw_value)
        return self._admission

    def set_discount_kind(self, kind: DiscountKind | str | None) -> Admission:
        self._admission = apply_discount_kind(self._admission, kind)
        return self._admission

    def set_discount_value(self, raw_value: Any) -> Admission:
        self._admission = apply_discount_value(self._admission, raw_value)
        return self._admission

    def set_paid_amount(self, raw_value: Any) -> Admission:
        self._admission = apply_paid_amount(self._admission, raw_value)
        return self._admission

    def set_info(self, **info: str) -> Admission:
        self._admission = self._admission.with_info(**info)
        return self._admission

    def request_status(self, new_status: AdmissionStatus | str) -> TransitionOutcome:
        outcome = self._transitions.request_status(self._admission, new_status)
        self._admission = outcome.admission
        self._advisories = outcome.advisories
        return outcome

    def cancel(self) -> TransitionOutcome:
        outcome = self._transitions.cancel(self._admission)
        self._admission = outcome.admission
        self._advisories = outcome.advisories
        return outcome

    def validate(self) -> ValidationResult:
        """Run the edit gate against the current value."""
        return validate_edit(self._admission)
