# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use case for booking a new appointment.
# ============================================================================
"""Book Appointment Use Case.

Validates the booking locally, then inserts a Scheduled appointment for
the current nurse. Overlapping bookings are not checked.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable

from ...domain.entities import Appointment
from ...domain.value_objects import AppointmentStatus
from ..dto.visit_dtos import BookAppointmentRequest, ErrorKind, UseCaseResult
from ..ports.query import Collection
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import IDataService

logger = logging.getLogger(__name__)


class BookAppointmentUseCase:
    """Use case for booking a new appointment."""

    def __init__(
        self,
        data_service: "IDataService",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize use case.

        Args:
            data_service: Data service port.
            clock: Returns the current local time; the booking must be later.
        """
        self._data = data_service
        self._clock = clock

    def validate(self, request: BookAppointmentRequest) -> UseCaseResult:
        """Client-side preconditions, checked before any remote call."""
        if not request.patient_id or request.appointment_date is None or request.appointment_time is None:
            return UseCaseResult.error(ErrorKind.VALIDATION, "Please fill in all fields")

        scheduled_at = datetime.combine(request.appointment_date, request.appointment_time)
        if scheduled_at <= self._clock():
            return UseCaseResult.error(ErrorKind.VALIDATION, "Please select a future date and time")

        return UseCaseResult.ok()

    async def execute(self, request: BookAppointmentRequest) -> UseCaseResult:
        validation = self.validate(request)
        if not validation.success:
            logger.info(f"Booking rejected: {validation.error_message}")
            return validation

        appointment = Appointment(
            patient_id=request.patient_id,
            nurse_id=request.nurse_id,
            appointment_date=request.appointment_date,
            appointment_time=request.appointment_time,
            status=AppointmentStatus.SCHEDULED,
        )

        logger.info(
            f"Booking appointment for patient {request.patient_id} "
            f"on {request.appointment_date.isoformat()} at {request.appointment_time.strftime('%H:%M')}"
        )
        response = await self._data.insert(Collection.APPOINTMENTS, appointment.to_insert_dict())

        if not response.success:
            logger.warning(f"Failed to book appointment: {response.error_code} - {response.error_message}")
            return UseCaseResult.error(
                ResponseExtractor.error_kind(response),
                "Booking failed. Try again!",
            )

        logger.info(f"Appointment booked for patient {request.patient_id}")
        return UseCaseResult.ok()
