"""
Pure domain layer.

This module contains pure value objects and DTOs with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- Wall-clock time (use an injected Clock)
- I/O

All domain objects are immutable and deterministic.
"""

from admission_kernel.domain.admission import Admission, ChargeSet
from admission_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from admission_kernel.domain.intake import AdmissionIntake
from admission_kernel.domain.dtos import (
    MANUAL_REFUND_REQUIRED,
    Advisory,
    BillingTotals,
    TransitionOutcome,
    ValidationError,
    ValidationResult,
)
from admission_kernel.domain.values import (
    ZERO,
    AdmissionStatus,
    ChargeField,
    DiscountKind,
    DiscountSpec,
    coerce_amount,
)

__all__ = [
    # Aggregate
    "Admission",
    "ChargeSet",
    "AdmissionIntake",
    # Values
    "AdmissionStatus",
    "ChargeField",
    "DiscountKind",
    "DiscountSpec",
    "ZERO",
    "coerce_amount",
    # DTOs
    "Advisory",
    "BillingTotals",
    "MANUAL_REFUND_REQUIRED",
    "TransitionOutcome",
    "ValidationError",
    "ValidationResult",
    # Clock
    "Clock",
    "DeterministicClock",
    "SystemClock",
]
