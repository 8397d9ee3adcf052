"""
AdmissionRepository -- persistence adapter for the Admission aggregate.

Responsibility:
    Stores and loads Admission values through the ``AdmissionRecord`` ORM
    model.  Flush-only; the caller owns the transaction.

Architecture position:
    Kernel > Services.  Called by AdmissionService and
    AdmissionNumberService.

Invariants enforced:
    - An assigned admission number is never rewritten by ``update``.

Failure modes:
    - AdmissionNotFoundError from ``get``/``update`` for an unknown id.
    - AdmissionNumberImmutableError when an update changes the number.
    - SQLAlchemy errors (IntegrityError on duplicate numbers, connection
      errors) propagate unchanged; nothing is retried.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta, tzinfo
from uuid import UUID

from sqlalchemy import func, select

from admission_kernel.domain.admission import Admission
from admission_kernel.exceptions import (
    AdmissionNotFoundError,
    AdmissionNumberImmutableError,
)
from admission_kernel.logging_config import get_logger
from admission_kernel.models.admission import AdmissionRecord
from admission_kernel.services.base import BaseService

logger = get_logger("services.admission_repository")


class AdmissionRepository(BaseService[AdmissionRecord]):
    """Create, update and look up stored admissions."""

    def create(self, admission: Admission, actor_id: UUID | None = None) -> Admission:
        record = AdmissionRecord.from_domain(admission)
        record.created_by_id = actor_id
        self.session.add(record)
        self.session.flush()

        logger.info("admission_created", extra={
            "admission_id": str(admission.id),
            "admission_number": admission.admission_number,
            "status": admission.status.value,
        })
        return record.to_domain()

    def update(self, admission: Admission, actor_id: UUID | None = None) -> Admission:
        """
        Overwrite the stored row with the given value.

        Raises:
            AdmissionNotFoundError: No row with ``admission.id``.
            AdmissionNumberImmutableError: The row is already numbered and
                the value carries a different number.
        """
        record = self._load(admission.id)

        if (
            record.admission_number is not None
            and admission.admission_number != record.admission_number
        ):
            raise AdmissionNumberImmutableError(
                str(admission.id),
                record.admission_number,
                str(admission.admission_number),
            )

        record.apply(admission)
        record.updated_by_id = actor_id
        self.session.flush()

        logger.info("admission_updated", extra={
            "admission_id": str(admission.id),
            "admission_number": admission.admission_number,
            "status": admission.status.value,
            "grand_total": str(admission.grand_total),
            "due_amount": str(admission.due_amount),
        })
        return record.to_domain()

    def get(self, admission_id: UUID) -> Admission:
        """
        Load one admission.

        Raises:
            AdmissionNotFoundError: No row with this id.
        """
        return self._load(admission_id).to_domain()

    def get_by_number(self, admission_number: str) -> Admission | None:
        record = self.session.execute(
            select(AdmissionRecord).where(
                AdmissionRecord.admission_number == admission_number
            )
        ).scalar_one_or_none()
        return record.to_domain() if record is not None else None

    def count_admitted_on(self, day: date, tz: tzinfo = UTC) -> int:
        """Number of admissions whose ``date_admitted`` falls on ``day`` in ``tz``."""
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = start + timedelta(days=1)
        return self.session.execute(
            select(func.count(AdmissionRecord.id)).where(
                AdmissionRecord.date_admitted >= start,
                AdmissionRecord.date_admitted < end,
            )
        ).scalar_one()

    def _load(self, admission_id: UUID) -> AdmissionRecord:
        record = self.session.get(AdmissionRecord, admission_id)
        if record is None:
            raise AdmissionNotFoundError(str(admission_id))
        return record
