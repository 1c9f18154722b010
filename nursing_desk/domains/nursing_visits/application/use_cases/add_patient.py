# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use case for adding a patient to the directory.
# ============================================================================
"""Add Patient Use Case."""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import Patient
from ..dto.visit_dtos import AddPatientRequest, ErrorKind, UseCaseResult
from ..ports.query import Collection
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import IDataService

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class AddPatientUseCase:
    """Insert a patient. First name, last name and date of birth are required."""

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self, request: AddPatientRequest) -> UseCaseResult:
        first_name = _clean(request.first_name)
        last_name = _clean(request.last_name)
        if not first_name or not last_name or request.date_of_birth is None:
            return UseCaseResult.error(
                ErrorKind.VALIDATION,
                "Please enter first name, last name, and date of birth.",
            )

        patient = Patient(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=request.date_of_birth,
            address=_clean(request.address),
            phone_number=_clean(request.phone_number),
            emergency_contact=_clean(request.emergency_contact),
        )

        logger.info(f"Adding patient {patient.full_name}")
        response = await self._data.insert(Collection.PATIENTS, patient.to_insert_dict())

        if not response.success:
            logger.warning(f"Failed to add patient: {response.error_code} - {response.error_message}")
            return UseCaseResult.error(
                ResponseExtractor.error_kind(response),
                ResponseExtractor.error_message(response, "Failed to add patient"),
            )

        return UseCaseResult.ok(data=patient)
