# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use case for a patient's visit history.
# ============================================================================
"""Get Visit History Use Case.

Returns every appointment of a patient with its visit records, ordered
by (date, time) ascending. Display order is the caller's concern.
"""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import Appointment
from ..dto.visit_dtos import VisitHistoryResult
from ..ports.query import Collection, OrderBy, QueryFilter
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import IDataService

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = (
    "id, patient_id, nurse_id, appointment_date, appointment_time, status, "
    "patient_records(id, notes, vitals, recorded_at)"
)


class GetVisitHistoryUseCase:
    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self, patient_id: str) -> VisitHistoryResult:
        response = await self._data.query(
            Collection.APPOINTMENTS,
            columns=HISTORY_COLUMNS,
            filters=[QueryFilter.eq("patient_id", patient_id)],
            ordering=[
                OrderBy("appointment_date", ascending=True),
                OrderBy("appointment_time", ascending=True),
            ],
        )

        if not response.success:
            logger.warning(f"Error fetching history for patient {patient_id}: {response.error_message}")
            return VisitHistoryResult(
                success=False,
                error_code=ResponseExtractor.error_kind(response),
                error_message=ResponseExtractor.error_message(response, "Couldn't load visit history"),
            )

        visits = [Appointment.from_external_data(row) for row in ResponseExtractor.as_list(response.data)]
        logger.info(f"Found {len(visits)} visits for patient {patient_id}")
        return VisitHistoryResult(success=True, visits=visits)
