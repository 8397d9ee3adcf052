"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable results that flow out of the engines:
    BillingTotals (derived amounts), ValidationError/ValidationResult
    (blocking gate outcome), Advisory (non-blocking condition) and
    TransitionOutcome (status change result).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    None of these types raise for recoverable conditions; they ARE the
    representation of those conditions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from admission_kernel.domain.admission import Admission
    from admission_kernel.domain.values import AdmissionStatus


@dataclass(frozen=True, slots=True)
class BillingTotals:
    """
    Derived monetary totals of an admission.

    Guarantees (when produced by compute_totals):
        - 0 <= discount_amount <= total_amount
        - grand_total == total_amount - discount_amount
        - due_amount == grand_total - paid_amount (may be negative)
    """

    total_amount: Decimal
    discount_amount: Decimal
    grand_total: Decimal
    due_amount: Decimal

    @property
    def refund_owed(self) -> bool:
        """True when more has been collected than is due."""
        return self.due_amount < 0


@dataclass(frozen=True)
class ValidationError:
    """
    A single validation error.

    Carries a machine-readable code, the human-readable message shown to
    the user, and optionally the offending field.
    """

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of a submission gate.

    Guarantees:
        - errors is always a tuple, in the order the checks ran
        - bool(result) == result.is_valid
    """

    is_valid: bool
    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(is_valid=True, errors=())

    @classmethod
    def failure(cls, *errors: ValidationError) -> ValidationResult:
        return cls(is_valid=False, errors=tuple(errors))

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(e.message for e in self.errors)

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass(frozen=True)
class Advisory:
    """A non-blocking condition the caller should surface to the user."""

    code: str
    message: str
    details: dict[str, Any] | None = None


MANUAL_REFUND_REQUIRED = "MANUAL_REFUND_REQUIRED"


@dataclass(frozen=True)
class TransitionOutcome:
    """Result of a status change: the next admission value plus advisories."""

    admission: Admission
    previous_status: AdmissionStatus
    advisories: tuple[Advisory, ...] = ()

    @property
    def refund_required(self) -> bool:
        return any(a.code == MANUAL_REFUND_REQUIRED for a in self.advisories)
