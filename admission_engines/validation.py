"""
Submission Validator.

Pure checks with no I/O.  Gates persistence of a new or edited admission
by inspecting state only; nothing is mutated and nothing is raised.
Failures come back as a ValidationResult whose errors keep the order in
which the checks ran, so the first message is the most fundamental one.

Creation gate (in order):
    hospital name, patient first name, gender, phone, date of birth,
    department, doctor, then phone format and email format.

Edit gate:
    seat rent charged without a room/seat number.
"""

from __future__ import annotations

import re
from typing import Protocol

from admission_kernel.domain.admission import Admission
from admission_kernel.domain.dtos import ValidationError, ValidationResult
from admission_kernel.domain.intake import AdmissionIntake
from admission_kernel.domain.values import ZERO
from admission_kernel.logging_config import get_logger

logger = get_logger("engines.validation")

SEAT_NUMBER_REQUIRED_MESSAGE = "Please enter room/seat number when charging seat rent"


class FormatChecker(Protocol):
    """Phone/email format collaborator consumed by the creation gate."""

    def is_valid_phone(self, phone: str) -> bool: ...

    def is_valid_email(self, email: str) -> bool: ...


class RegexFormatChecker:
    """Default format checker: loose phone pattern, simple email shape."""

    PHONE_PATTERN = re.compile(r"^[+]?[\d\s\-()]{10,}$")
    EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    def is_valid_phone(self, phone: str) -> bool:
        return bool(self.PHONE_PATTERN.match(phone.strip()))

    def is_valid_email(self, email: str) -> bool:
        return bool(self.EMAIL_PATTERN.match(email.strip()))


def validate_creation(
    intake: AdmissionIntake,
    format_checker: FormatChecker | None = None,
) -> ValidationResult:
    """Creation gate for a new admission."""
    checker = format_checker or RegexFormatChecker()
    errors: list[ValidationError] = []

    required_text = (
        ("hospital_name", intake.hospital_name, "Hospital name is required"),
        ("patient_first_name", intake.patient_first_name, "Patient first name is required"),
        ("patient_gender", intake.patient_gender, "Patient gender is required"),
        ("patient_phone", intake.patient_phone, "Patient phone number is required"),
    )
    for field_name, value, message in required_text:
        if not (value or "").strip():
            errors.append(ValidationError(code="REQUIRED", message=message, field=field_name))

    if intake.patient_date_of_birth is None:
        errors.append(ValidationError(
            code="REQUIRED",
            message="Patient date of birth is required",
            field="patient_date_of_birth",
        ))
    if not intake.department_id:
        errors.append(ValidationError(
            code="REQUIRED", message="Department is required", field="department_id",
        ))
    if not intake.doctor_id:
        errors.append(ValidationError(
            code="REQUIRED", message="Doctor is required", field="doctor_id",
        ))

    phone = (intake.patient_phone or "").strip()
    if phone and not checker.is_valid_phone(phone):
        errors.append(ValidationError(
            code="INVALID_FORMAT", message="Invalid phone number", field="patient_phone",
        ))
    email = (intake.patient_email or "").strip()
    if email and not checker.is_valid_email(email):
        errors.append(ValidationError(
            code="INVALID_FORMAT", message="Invalid email address", field="patient_email",
        ))

    if errors:
        logger.info("creation_gate_failed", extra={
            "error_count": len(errors),
            "fields": [e.field for e in errors],
        })
        return ValidationResult.failure(*errors)

    logger.debug("creation_gate_passed")
    return ValidationResult.success()


def validate_edit(admission: Admission) -> ValidationResult:
    """Edit gate for an existing admission."""
    if admission.charges.seat_rent > ZERO and not admission.seat_number.strip():
        logger.info("edit_gate_failed", extra={
            "admission_number": admission.admission_number,
            "seat_rent": str(admission.charges.seat_rent),
        })
        return ValidationResult.failure(ValidationError(
            code="SEAT_NUMBER_REQUIRED",
            message=SEAT_NUMBER_REQUIRED_MESSAGE,
            field="seat_number",
            details={"seat_rent": str(admission.charges.seat_rent)},
        ))
    return ValidationResult.success()


def summarize_errors(result: ValidationResult) -> str:
    """One notification line for a failed gate ("" when it passed)."""
    messages = result.messages
    if not messages:
        return ""
    if len(messages) == 1:
        return messages[0]
    return f"Please fix the following: {', '.join(messages)}"
