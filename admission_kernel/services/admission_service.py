"""
AdmissionService -- the admission desk workflow over persistence.

Responsibility:
    Composes the pure engines (validation, editing, status transitions)
    with the repository and number allocation:

        open_admission  -> creation gate, build, number, persist
        submit_edit     -> edit gate, recompute, persist, payment delta
        change_status   -> load, transition, persist, advisories
        cancel          -> load, cancel action, persist, advisories

Architecture position:
    Kernel > Services -- imperative shell.  Flush-only; the caller owns
    commit/rollback (see ``admission_kernel.db.engine.session_scope``).

Failure modes:
    - Validation failures are returned as data (``persisted=False``);
      nothing is written and the caller's in-memory value is untouched.
    - AdmissionNotFoundError for unknown ids.
    - Persistence errors propagate unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy.orm import Session

from admission_config.schema import PricingConfig
from admission_engines.editing import open_admission as build_admission
from admission_engines.status import StatusTransitionEngine
from admission_engines.totals import recompute
from admission_engines.validation import (
    FormatChecker,
    validate_creation,
    validate_edit,
)
from admission_kernel.domain.admission import Admission
from admission_kernel.domain.clock import Clock, SystemClock
from admission_kernel.domain.dtos import TransitionOutcome, ValidationResult
from admission_kernel.domain.intake import AdmissionIntake
from admission_kernel.domain.values import ZERO, AdmissionStatus
from admission_kernel.logging_config import LogContext, get_logger
from admission_kernel.models.admission import AdmissionRecord
from admission_kernel.services.admission_number import AdmissionNumberService
from admission_kernel.services.admission_repository import AdmissionRepository
from admission_kernel.services.base import BaseService

logger = get_logger("services.admission")


class PaymentMovement(str, Enum):
    """Direction of cash movement implied by an edit."""

    COLLECTION = "COLLECTION"
    REFUND = "REFUND"


@dataclass(frozen=True)
class PaymentDelta:
    """Change in paid amount between the stored and submitted admission."""

    movement: PaymentMovement
    amount: Decimal


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of a gated write.

    ``admission`` is the stored value when persisted, otherwise the
    submitted value unchanged (None when creation was refused).
    """

    persisted: bool
    validation: ValidationResult
    admission: Admission | None = None
    payment_delta: PaymentDelta | None = None


def payment_delta(previous_paid: Decimal, new_paid: Decimal) -> PaymentDelta | None:
    diff = new_paid - previous_paid
    if diff > ZERO:
        return PaymentDelta(PaymentMovement.COLLECTION, diff)
    if diff < ZERO:
        return PaymentDelta(PaymentMovement.REFUND, -diff)
    return None


class AdmissionService(BaseService[AdmissionRecord]):
    """
    Admission desk operations.

    Contract:
        Every write goes through the matching gate first; only a passing
        value reaches the repository.  All amounts written are the ones
        produced by a fresh recomputation.
    """

    def __init__(
        self,
        session: Session,
        pricing: PricingConfig,
        clock: Clock | None = None,
        format_checker: FormatChecker | None = None,
        actor_id: UUID | None = None,
    ):
        super().__init__(session)
        self._pricing = pricing
        self._clock = clock or SystemClock()
        self._format_checker = format_checker
        self._actor_id = actor_id
        self._repository = AdmissionRepository(session)
        self._numbers = AdmissionNumberService(
            session, prefix=pricing.admission_number_prefix,
        )
        self._transitions = StatusTransitionEngine(
            default_fee=pricing.admission_fee,
            clock=self._clock,
            currency=pricing.currency,
        )

    @property
    def transitions(self) -> StatusTransitionEngine:
        return self._transitions

    @property
    def repository(self) -> AdmissionRepository:
        return self._repository

    def open_admission(self, intake: AdmissionIntake) -> SubmissionOutcome:
        """Validate the intake form and create a numbered admission."""
        validation = validate_creation(intake, self._format_checker)
        if not validation.is_valid:
            logger.info("admission_creation_rejected", extra={
                "error_codes": [e.code for e in validation.errors],
                "error_fields": [e.field for e in validation.errors],
            })
            return SubmissionOutcome(persisted=False, validation=validation)

        now = self._clock.now()
        admission = build_admission(
            intake,
            admission_fee=self._pricing.admission_fee,
            clock=self._clock,
            admission_number=self._numbers.next_number(now),
            admitted_at=now,
        )
        LogContext.set(admission_id=str(admission.id))
        stored = self._repository.create(admission, actor_id=self._actor_id)
        return SubmissionOutcome(persisted=True, validation=validation, admission=stored)

    def submit_edit(self, admission: Admission) -> SubmissionOutcome:
        """Validate and persist an edited admission.

        Reports the paid-amount change against the stored value so the
        caller can record a collection or refund.
        """
        LogContext.set(admission_id=str(admission.id))
        validation = validate_edit(admission)
        if not validation.is_valid:
            logger.info("admission_edit_rejected", extra={
                "admission_number": admission.admission_number,
                "error_codes": [e.code for e in validation.errors],
            })
            return SubmissionOutcome(
                persisted=False, validation=validation, admission=admission,
            )

        previous = self._repository.get(admission.id)
        stored = self._repository.update(recompute(admission), actor_id=self._actor_id)
        delta = payment_delta(previous.paid_amount, stored.paid_amount)

        if delta is not None:
            logger.info("admission_payment_delta", extra={
                "admission_number": stored.admission_number,
                "movement": delta.movement.value,
                "amount": str(delta.amount),
            })
        return SubmissionOutcome(
            persisted=True, validation=validation, admission=stored, payment_delta=delta,
        )

    def change_status(
        self,
        admission_id: UUID,
        new_status: AdmissionStatus | str,
    ) -> TransitionOutcome:
        """Load, transition and persist; advisories are returned to the caller."""
        LogContext.set(admission_id=str(admission_id))
        outcome = self._transitions.request_status(
            self._repository.get(admission_id), new_status,
        )
        return self._persist_transition(outcome)

    def cancel(self, admission_id: UUID) -> TransitionOutcome:
        LogContext.set(admission_id=str(admission_id))
        outcome = self._transitions.cancel(self._repository.get(admission_id))
        return self._persist_transition(outcome)

    def _persist_transition(self, outcome: TransitionOutcome) -> TransitionOutcome:
        stored = self._repository.update(outcome.admission, actor_id=self._actor_id)
        for advisory in outcome.advisories:
            logger.warning("admission_advisory", extra={
                "admission_number": stored.admission_number,
                "advisory_code": advisory.code,
                "advisory_message": advisory.message,
            })
        return TransitionOutcome(
            admission=stored,
            previous_status=outcome.previous_status,
            advisories=outcome.advisories,
        )
