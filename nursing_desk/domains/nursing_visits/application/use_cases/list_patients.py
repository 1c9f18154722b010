# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Patient directory listing and search.
# ============================================================================
"""Patient Directory Use Cases."""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import Patient
from ..dto.visit_dtos import PatientListResult
from ..ports.query import Collection, QueryFilter
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import ExternalResponse, IDataService

logger = logging.getLogger(__name__)


def _to_result(response: "ExternalResponse", action: str) -> PatientListResult:
    if not response.success:
        logger.warning(f"Error {action} patients: {response.error_message}")
        return PatientListResult(
            success=False,
            error_code=ResponseExtractor.error_kind(response),
            error_message=ResponseExtractor.error_message(response, f"Error {action} patients"),
        )
    patients = [Patient.from_external_data(row) for row in ResponseExtractor.as_list(response.data)]
    return PatientListResult(success=True, patients=patients)


class ListPatientsUseCase:
    """Every patient, in the order the data service returns them."""

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self) -> PatientListResult:
        response = await self._data.query(Collection.PATIENTS)
        return _to_result(response, "fetching")


class SearchPatientsUseCase:
    """Case-insensitive substring search on first or last name.

    A blank term behaves exactly like listing every patient.
    """

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service
        self._list_all = ListPatientsUseCase(data_service)

    async def execute(self, term: str | None) -> PatientListResult:
        needle = (term or "").strip()
        if not needle:
            return await self._list_all.execute()

        logger.debug(f"Searching patients for {needle!r}")
        response = await self._data.query(
            Collection.PATIENTS,
            filters=[
                QueryFilter.or_(
                    QueryFilter.ilike("first_name", needle),
                    QueryFilter.ilike("last_name", needle),
                )
            ],
        )
        return _to_result(response, "searching")
