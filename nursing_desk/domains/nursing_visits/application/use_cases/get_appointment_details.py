# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use case for loading one appointment before completing it.
# ============================================================================
"""Get Appointment Details Use Case."""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import Appointment
from ..dto.visit_dtos import AppointmentDetailsResult, ErrorKind
from ..ports.query import Collection, QueryFilter
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import IDataService

logger = logging.getLogger(__name__)


class GetAppointmentDetailsUseCase:
    """Fetch an appointment of the current nurse with its patient's name."""

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self, appointment_id: str, nurse_id: str) -> AppointmentDetailsResult:
        response = await self._data.query(
            Collection.APPOINTMENTS,
            columns="id, patient_id, nurse_id, appointment_date, appointment_time, status, "
            "patients(first_name, last_name)",
            filters=[
                QueryFilter.eq("id", appointment_id),
                QueryFilter.eq("nurse_id", nurse_id),
            ],
            limit=1,
        )

        if not response.success:
            logger.warning(f"Could not load appointment {appointment_id}: {response.error_message}")
            return AppointmentDetailsResult(
                success=False,
                error_code=ResponseExtractor.error_kind(response),
                error_message="Couldn't find appointment.",
            )

        rows = ResponseExtractor.as_list(response.data)
        if not rows:
            return AppointmentDetailsResult(
                success=False,
                error_code=ErrorKind.REMOTE,
                error_message="Couldn't find appointment.",
            )

        return AppointmentDetailsResult(success=True, appointment=Appointment.from_external_data(rows[0]))
