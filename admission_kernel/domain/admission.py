"""
Admission aggregate -- one hospital stay record and its billing state.

Responsibility:
    Holds the ChargeSet, DiscountSpec, paid amount and lifecycle status of
    an admission together with the derived totals last computed for them.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.  Derived totals are
    computed by ``admission_engines.totals``; this module only stores them.

Invariants (hold for every value produced by the engines):
    - total_amount == charges.total()
    - 0 <= discount_amount <= total_amount
    - grand_total == total_amount - discount_amount
    - due_amount == grand_total - paid_amount
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from admission_kernel.domain.dtos import BillingTotals
from admission_kernel.domain.values import (
    ZERO,
    AdmissionStatus,
    ChargeField,
    DiscountSpec,
)


@dataclass(frozen=True, slots=True)
class ChargeSet:
    """The ten itemized billable fields of an admission."""

    admission_fee: Decimal = ZERO
    service_charge: Decimal = ZERO
    seat_rent: Decimal = ZERO
    ot_charge: Decimal = ZERO
    doctor_charge: Decimal = ZERO
    surgeon_charge: Decimal = ZERO
    anesthesia_fee: Decimal = ZERO
    assistant_doctor_fee: Decimal = ZERO
    medicine_charge: Decimal = ZERO
    other_charges: Decimal = ZERO

    @classmethod
    def initial(cls, admission_fee: Decimal) -> ChargeSet:
        """ChargeSet of a freshly opened admission."""
        return cls(admission_fee=admission_fee)

    def get(self, charge_field: ChargeField) -> Decimal:
        return getattr(self, charge_field.value)

    def with_amount(self, charge_field: ChargeField, amount: Decimal) -> ChargeSet:
        return replace(self, **{charge_field.value: amount})

    def items(self) -> Iterator[tuple[ChargeField, Decimal]]:
        for charge_field in ChargeField:
            yield charge_field, self.get(charge_field)

    def total(self) -> Decimal:
        return sum((amount for _, amount in self.items()), ZERO)

    def as_dict(self) -> dict[str, Decimal]:
        return {f.value: amount for f, amount in self.items()}


@dataclass(frozen=True, slots=True)
class Admission:
    """
    Aggregate root for one admission.

    Immutable: every engine mutator returns the next full value with the
    derived totals recomputed.
    """

    date_admitted: datetime
    id: UUID = field(default_factory=uuid4)
    admission_number: str | None = None

    # Opaque references, not owned
    patient_id: int | None = None
    hospital_id: int | None = None
    department_id: int | None = None
    doctor_id: int | None = None

    status: AdmissionStatus = AdmissionStatus.ADMITTED
    date_discharged: datetime | None = None

    charges: ChargeSet = field(default_factory=ChargeSet)
    discount: DiscountSpec = field(default_factory=DiscountSpec)
    paid_amount: Decimal = ZERO

    # Free-text admission information
    seat_number: str = ""
    ward: str = ""
    diagnosis: str = ""
    treatment: str = ""
    ot_type: str = ""
    remarks: str = ""
    chief_complaint: str = ""

    # Derived
    total_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    grand_total: Decimal = ZERO
    due_amount: Decimal = ZERO

    @property
    def totals(self) -> BillingTotals:
        return BillingTotals(
            total_amount=self.total_amount,
            discount_amount=self.discount_amount,
            grand_total=self.grand_total,
            due_amount=self.due_amount,
        )

    @property
    def is_canceled(self) -> bool:
        return self.status is AdmissionStatus.CANCELED

    @property
    def is_discharged(self) -> bool:
        return self.status is AdmissionStatus.DISCHARGED

    def with_totals(self, totals: BillingTotals) -> Admission:
        return replace(
            self,
            total_amount=totals.total_amount,
            discount_amount=totals.discount_amount,
            grand_total=totals.grand_total,
            due_amount=totals.due_amount,
        )

    def with_info(self, **info: str) -> Admission:
        """Return a copy with free-text admission fields replaced."""
        allowed = {
            "seat_number", "ward", "diagnosis", "treatment",
            "ot_type", "remarks", "chief_complaint",
        }
        unknown = set(info) - allowed
        if unknown:
            raise TypeError(f"Not admission info fields: {sorted(unknown)}")
        return replace(self, **{k: v or "" for k, v in info.items()})

    def to_receipt_dict(self) -> dict[str, Any]:
        """Finalized amounts handed to receipt/invoice rendering."""
        return {
            "admission_number": self.admission_number,
            "status": self.status.value,
            "date_admitted": self.date_admitted.isoformat(),
            "date_discharged": (
                self.date_discharged.isoformat() if self.date_discharged else None
            ),
            "charges": {k: str(v) for k, v in self.charges.as_dict().items()},
            "discount_type": self.discount.kind.value,
            "discount_value": (
                str(self.discount.value) if self.discount.value is not None else None
            ),
            "total_amount": str(self.total_amount),
            "discount_amount": str(self.discount_amount),
            "grand_total": str(self.grand_total),
            "paid_amount": str(self.paid_amount),
            "due_amount": str(self.due_amount),
        }
