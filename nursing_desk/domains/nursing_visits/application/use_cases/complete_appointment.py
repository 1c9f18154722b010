# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use case for completing an appointment with a visit record.
# ============================================================================
"""Complete Appointment Use Case.

The only multi-step write. The data service offers no transaction
across the two tables, so the steps run in order and each outcome is
reported as a phase:

    PENDING -> RECORD_WRITTEN -> STATUS_UPDATED
    PENDING -> FAILED                  (nothing was written)
    RECORD_WRITTEN -> FAILED           (partial failure, record kept)

An orphaned record is never deleted.
"""

import logging
from typing import TYPE_CHECKING

from nursing_desk.core.domain.exceptions import ValidationException

from ...domain.entities import VisitRecord
from ...domain.value_objects import AppointmentStatus, Vitals
from ..dto.visit_dtos import (
    CompleteAppointmentRequest,
    CompleteAppointmentResult,
    CompletionPhase,
    ErrorKind,
)
from ..ports.query import Collection, QueryFilter
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import ExternalResponse, IDataService

logger = logging.getLogger(__name__)

RECORD_NOT_SAVED_MESSAGE = "Failed to save notes. Try again!"
PARTIAL_FAILURE_MESSAGE = (
    "Notes saved, but the status change failed. The appointment still shows as upcoming "
    "and needs manual follow-up."
)


class CompleteAppointmentUseCase:
    """Use case for completing a Scheduled appointment.

    The status update only matches rows that are still Scheduled, so an
    appointment completed elsewhere in the meantime surfaces as a partial
    failure.
    """

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self, request: CompleteAppointmentRequest) -> CompleteAppointmentResult:
        if not request.appointment_id:
            return self._invalid("No appointment selected.")
        if request.status is not None and not request.status.can_transition_to(AppointmentStatus.COMPLETED):
            return self._invalid(f"This appointment is already {request.status.value}.")
        if not request.notes or not request.notes.strip():
            return self._invalid("Please enter notes before saving.")
        try:
            vitals = Vitals.parse(request.vitals)
        except ValidationException as e:
            return self._invalid(e.message)

        record = VisitRecord(appointment_id=request.appointment_id, notes=request.notes, vitals=vitals)

        logger.info(f"Saving visit record for appointment {request.appointment_id}")
        insert_response = await self._data.insert(Collection.PATIENT_RECORDS, record.to_insert_dict())
        if not insert_response.success:
            logger.warning(
                f"Visit record not saved for {request.appointment_id}: "
                f"{insert_response.error_code} - {insert_response.error_message}"
            )
            return CompleteAppointmentResult(
                success=False,
                error_code=ResponseExtractor.error_kind(insert_response),
                error_message=RECORD_NOT_SAVED_MESSAGE,
                phase=CompletionPhase.FAILED,
                record_written=False,
            )

        update_response = await self._data.update(
            Collection.APPOINTMENTS,
            {"status": AppointmentStatus.COMPLETED.value},
            filters=[
                QueryFilter.eq("id", request.appointment_id),
                QueryFilter.eq("nurse_id", request.nurse_id),
                QueryFilter.eq("status", AppointmentStatus.SCHEDULED.value),
            ],
        )
        if not self._status_updated(update_response):
            logger.error(
                f"Visit record saved but appointment {request.appointment_id} is still Scheduled: "
                f"{update_response.error_code} - {update_response.error_message}"
            )
            return CompleteAppointmentResult(
                success=False,
                error_code=ErrorKind.PARTIAL_FAILURE,
                error_message=PARTIAL_FAILURE_MESSAGE,
                phase=CompletionPhase.FAILED,
                record_written=True,
            )

        logger.info(f"Appointment {request.appointment_id} completed")
        return CompleteAppointmentResult(
            success=True,
            phase=CompletionPhase.STATUS_UPDATED,
            record_written=True,
        )

    @staticmethod
    def _status_updated(response: "ExternalResponse") -> bool:
        # An empty row list means no Scheduled row owned by this nurse matched
        if not response.success:
            return False
        if isinstance(response.data, list) and not response.data:
            return False
        return True

    @staticmethod
    def _invalid(message: str) -> CompleteAppointmentResult:
        return CompleteAppointmentResult(
            success=False,
            error_code=ErrorKind.VALIDATION,
            error_message=message,
            phase=CompletionPhase.PENDING,
        )
