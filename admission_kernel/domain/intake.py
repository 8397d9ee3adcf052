"""Intake form submitted when a new admission is opened."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AdmissionIntake:
    """
    Everything the front desk enters before an admission exists.

    Hospital and patient are either picked from search results (``*_id``
    set) or typed in as new records; the kernel treats both as opaque.
    """

    hospital_name: str = ""
    patient_first_name: str = ""
    patient_gender: str = ""
    patient_phone: str = ""
    patient_date_of_birth: date | None = None
    department_id: int | None = None
    doctor_id: int | None = None

    hospital_id: int | None = None
    patient_id: int | None = None
    patient_last_name: str = ""
    patient_email: str = ""

    seat_number: str = ""
    ward: str = ""
    diagnosis: str = ""
    treatment: str = ""
    ot_type: str = ""
    remarks: str = ""
    chief_complaint: str = ""

    @property
    def patient_full_name(self) -> str:
        return " ".join(
            part for part in (self.patient_first_name.strip(), self.patient_last_name.strip())
            if part
        )
