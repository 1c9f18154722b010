# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use cases for the upcoming and past appointment lists.
# ============================================================================
"""List Appointments Use Cases.

Upcoming = Scheduled, ordered by (date, time) ascending.
Past = Completed, ordered by (date, time) descending.
Both are capped to the request's limit and de-duplicated by identity.
"""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import Appointment
from ...domain.value_objects import AppointmentStatus
from ..dto.visit_dtos import AppointmentListResult, ListAppointmentsRequest
from ..ports.query import Collection, OrderBy, QueryFilter
from ..utils import ResponseExtractor, unique_by_id

if TYPE_CHECKING:
    from ..ports import IDataService

logger = logging.getLogger(__name__)

APPOINTMENT_LIST_COLUMNS = (
    "id, patient_id, nurse_id, appointment_date, appointment_time, status, patients(first_name, last_name)"
)


class _ListAppointmentsUseCase:
    status: AppointmentStatus
    ascending: bool
    label: str

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self, request: ListAppointmentsRequest) -> AppointmentListResult:
        response = await self._data.query(
            Collection.APPOINTMENTS,
            columns=APPOINTMENT_LIST_COLUMNS,
            filters=[
                QueryFilter.eq("nurse_id", request.nurse_id),
                QueryFilter.eq("status", self.status.value),
            ],
            ordering=[
                OrderBy("appointment_date", ascending=self.ascending),
                OrderBy("appointment_time", ascending=self.ascending),
            ],
            limit=request.limit,
        )

        if not response.success:
            logger.warning(f"Could not load {self.label} appointments: {response.error_message}")
            return AppointmentListResult(
                success=False,
                error_code=ResponseExtractor.error_kind(response),
                error_message=ResponseExtractor.error_message(response, f"Couldn't load {self.label} appointments"),
            )

        appointments = [Appointment.from_external_data(row) for row in ResponseExtractor.as_list(response.data)]
        unique = unique_by_id(appointments)
        if len(unique) != len(appointments):
            logger.debug(f"Dropped {len(appointments) - len(unique)} duplicate {self.label} rows")

        # Rows are re-checked against the requested status
        unique = [appointment for appointment in unique if appointment.status == self.status]

        return AppointmentListResult(success=True, appointments=unique)


class ListUpcomingAppointmentsUseCase(_ListAppointmentsUseCase):
    """Scheduled appointments of a nurse, soonest first."""

    status = AppointmentStatus.SCHEDULED
    ascending = True
    label = "upcoming"


class ListPastAppointmentsUseCase(_ListAppointmentsUseCase):
    """Completed appointments of a nurse, most recent first."""

    status = AppointmentStatus.COMPLETED
    ascending = False
    label = "past"
