# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use case for the signed-in nurse's profile.
# ============================================================================
"""Get Nurse Profile Use Case."""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import Nurse
from ..dto.visit_dtos import UseCaseResult
from ..ports.query import Collection, QueryFilter
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import IDataService

logger = logging.getLogger(__name__)


class GetNurseProfileUseCase:
    """Read the `nurses` row of the signed-in nurse. Data is a Nurse or None."""

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self, nurse_id: str) -> UseCaseResult:
        response = await self._data.query(
            Collection.NURSES,
            columns="id, first_name",
            filters=[QueryFilter.eq("id", nurse_id)],
            limit=1,
        )
        if not response.success:
            logger.warning(f"Could not load nurse profile {nurse_id}: {response.error_message}")
            return UseCaseResult.error(
                ResponseExtractor.error_kind(response),
                ResponseExtractor.error_message(response, "Couldn't load profile"),
            )

        rows = ResponseExtractor.as_list(response.data)
        return UseCaseResult.ok(data=Nurse.from_external_data(rows[0]) if rows else None)
