"""
AdmissionNumberService -- human-readable admission numbers.

Format: ``{prefix}-YYYYMMDD-NNNN`` where NNNN is the count of admissions
already admitted that calendar day plus one, zero-padded to four digits.

The count is read inside the caller's transaction.  Two concurrent
openings on the same day can compute the same number; the unique
constraint on ``admissions.admission_number`` rejects the second one with
an IntegrityError, which propagates to the caller.
"""

from datetime import UTC, datetime

from admission_kernel.logging_config import get_logger
from admission_kernel.models.admission import AdmissionRecord
from admission_kernel.services.admission_repository import AdmissionRepository
from admission_kernel.services.base import BaseService

logger = get_logger("services.admission_number")


class AdmissionNumberService(BaseService[AdmissionRecord]):

    def __init__(self, session, prefix: str = "ADM"):
        super().__init__(session)
        self._prefix = prefix
        self._repository = AdmissionRepository(session)

    def next_number(self, on: datetime) -> str:
        """Allocate the next number for an admission opened at ``on``."""
        tz = on.tzinfo or UTC
        day = on.astimezone(tz).date()
        sequence = self._repository.count_admitted_on(day, tz) + 1
        number = f"{self._prefix}-{day:%Y%m%d}-{sequence:04d}"

        logger.debug("admission_number_allocated", extra={
            "admission_number": number,
            "sequence": sequence,
        })
        return number
