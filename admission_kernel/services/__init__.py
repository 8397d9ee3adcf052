"""Kernel services - persistence and the admission desk workflow."""

from admission_kernel.services.admission_number import AdmissionNumberService
from admission_kernel.services.admission_repository import AdmissionRepository
from admission_kernel.services.admission_service import (
    AdmissionService,
    PaymentDelta,
    PaymentMovement,
    SubmissionOutcome,
    payment_delta,
)
from admission_kernel.services.base import BaseService

__all__ = [
    "BaseService",
    "AdmissionRepository",
    "AdmissionNumberService",
    "AdmissionService",
    "PaymentDelta",
    "PaymentMovement",
    "SubmissionOutcome",
    "payment_delta",
]
