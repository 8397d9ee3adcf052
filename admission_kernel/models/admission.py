"""
Module: admission_kernel.models.admission
Responsibility: ORM persistence for the Admission aggregate.  One row per
    hospital stay holding the itemized charges, the discount spec, the paid
    amount, lifecycle status and the derived totals as last recomputed.
Architecture position: Kernel > Models.  May import from db/base.py and the
    domain value types.  MUST NOT import from services/ or engines.

Invariants enforced:
    - admission_number is unique (uq_admission_number) and never rewritten
      once assigned (enforced by AdmissionRepository.update).
    - Derived totals are stored exactly as the engines produced them; the
      row never recomputes anything itself.

Failure modes:
    - IntegrityError on duplicate admission_number.
    - UnknownStatusError / UnknownDiscountKindError from to_domain() if a
      row holds a value outside the enums.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from admission_kernel.db.base import TrackedBase
from admission_kernel.domain.admission import Admission, ChargeSet
from admission_kernel.domain.values import (
    ZERO,
    AdmissionStatus,
    DiscountKind,
    DiscountSpec,
)


class AdmissionRecord(TrackedBase):
    """
    Stored form of one Admission.

    Contract:
        from_domain() and to_domain() are exact inverses for every field the
        domain value carries (amounts at two decimal places).
    """

    __tablename__ = "admissions"

    __table_args__ = (
        UniqueConstraint("admission_number", name="uq_admission_number"),
        Index("idx_admission_status", "status"),
        Index("idx_admission_date_admitted", "date_admitted"),
        Index("idx_admission_patient", "patient_id"),
    )

    admission_number: Mapped[str | None] = mapped_column(String(40), nullable=True)

    # Opaque references to records owned elsewhere
    patient_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    hospital_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    department_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    doctor_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    status: Mapped[str] = mapped_column(String(30), nullable=False)
    date_admitted: Mapped[datetime] = mapped_column(nullable=False)
    date_discharged: Mapped[datetime | None] = mapped_column(nullable=True)

    # Itemized charges
    admission_fee: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    service_charge: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    seat_rent: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    ot_charge: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    doctor_charge: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    surgeon_charge: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    anesthesia_fee: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    assistant_doctor_fee: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    medicine_charge: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    other_charges: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)

    # Discount spec, value stored raw
    discount_type: Mapped[str] = mapped_column(String(20), nullable=False)
    discount_value: Mapped[Decimal | None] = mapped_column(nullable=True)

    paid_amount: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)

    # Derived totals
    total_amount: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    discount_amount: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    grand_total: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    due_amount: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)

    # Free-text admission information
    seat_number: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    ward: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    diagnosis: Mapped[str] = mapped_column(Text, nullable=False, default="")
    treatment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    ot_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    chief_complaint: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<AdmissionRecord {self.admission_number}: {self.status}>"

    @classmethod
    def from_domain(cls, admission: Admission) -> AdmissionRecord:
        """Create a new row from a domain value, ready for session.add()."""
        record = cls(id=admission.id)
        record.apply(admission)
        return record

    def apply(self, admission: Admission) -> None:
        """Copy every mutable field of the domain value onto this row."""
        self.admission_number = admission.admission_number
        self.patient_id = admission.patient_id
        self.hospital_id = admission.hospital_id
        self.department_id = admission.department_id
        self.doctor_id = admission.doctor_id
        self.status = admission.status.value
        self.date_admitted = admission.date_admitted
        self.date_discharged = admission.date_discharged
        for charge_field, amount in admission.charges.items():
            setattr(self, charge_field.value, amount)
        self.discount_type = admission.discount.kind.value
        self.discount_value = admission.discount.value
        self.paid_amount = admission.paid_amount
        self.total_amount = admission.total_amount
        self.discount_amount = admission.discount_amount
        self.grand_total = admission.grand_total
        self.due_amount = admission.due_amount
        self.seat_number = admission.seat_number
        self.ward = admission.ward
        self.diagnosis = admission.diagnosis
        self.treatment = admission.treatment
        self.ot_type = admission.ot_type
        self.remarks = admission.remarks
        self.chief_complaint = admission.chief_complaint

    def to_domain(self) -> Admission:
        """Convert the row back into an immutable Admission value."""
        charges = ChargeSet(
            admission_fee=self.admission_fee,
            service_charge=self.service_charge,
            seat_rent=self.seat_rent,
            ot_charge=self.ot_charge,
            doctor_charge=self.doctor_charge,
            surgeon_charge=self.surgeon_charge,
            anesthesia_fee=self.anesthesia_fee,
            assistant_doctor_fee=self.assistant_doctor_fee,
            medicine_charge=self.medicine_charge,
            other_charges=self.other_charges,
        )
        return Admission(
            id=self.id,
            date_admitted=self.date_admitted,
            admission_number=self.admission_number,
            patient_id=self.patient_id,
            hospital_id=self.hospital_id,
            department_id=self.department_id,
            doctor_id=self.doctor_id,
            status=AdmissionStatus.parse(self.status),
            date_discharged=self.date_discharged,
            charges=charges,
            discount=DiscountSpec(
                kind=DiscountKind.parse(self.discount_type),
                value=self.discount_value,
            ),
            paid_amount=self.paid_amount,
            seat_number=self.seat_number or "",
            ward=self.ward or "",
            diagnosis=self.diagnosis or "",
            treatment=self.treatment or "",
            ot_type=self.ot_type or "",
            remarks=self.remarks or "",
            chief_complaint=self.chief_complaint or "",
            total_amount=self.total_amount,
            discount_amount=self.discount_amount,
            grand_total=self.grand_total,
            due_amount=self.due_amount,
        )
