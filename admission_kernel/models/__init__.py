"""ORM models for the admission kernel."""

from admission_kernel.models.admission import AdmissionRecord

__all__ = ["AdmissionRecord"]
