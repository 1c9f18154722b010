# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Completion counters for the dashboard.
# ============================================================================
"""Completion Counter Use Cases.

Each counter is its own remote read over all matching rows. They are
never derived from the (possibly capped) appointment lists.
"""

import logging
from datetime import date
from typing import TYPE_CHECKING, Callable

from ...domain.value_objects import AppointmentStatus
from ..dto.visit_dtos import CountResult
from ..ports.query import Collection, QueryFilter
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import IDataService

logger = logging.getLogger(__name__)


async def _count_completed(
    data_service: "IDataService",
    filters: list[QueryFilter],
    label: str,
) -> CountResult:
    response = await data_service.count(Collection.APPOINTMENTS, filters=filters)
    if not response.success:
        logger.warning(f"Could not count {label} completions: {response.error_message}")
        return CountResult(
            success=False,
            error_code=ResponseExtractor.error_kind(response),
            error_message=ResponseExtractor.error_message(response, "Couldn't load completion count"),
        )
    return CountResult(success=True, count=ResponseExtractor.get_count(response.data))


class CountCompletedTodayUseCase:
    """Completed appointments whose date equals today's local date."""

    def __init__(self, data_service: "IDataService", today: Callable[[], date] = date.today) -> None:
        self._data = data_service
        self._today = today

    async def execute(self, nurse_id: str) -> CountResult:
        today = self._today()
        return await _count_completed(
            self._data,
            [
                QueryFilter.eq("nurse_id", nurse_id),
                QueryFilter.eq("status", AppointmentStatus.COMPLETED.value),
                QueryFilter.eq("appointment_date", today.isoformat()),
            ],
            "today's",
        )


class CountCompletedTotalUseCase:
    """All completed appointments of a nurse."""

    def __init__(self, data_service: "IDataService") -> None:
        self._data = data_service

    async def execute(self, nurse_id: str) -> CountResult:
        return await _count_completed(
            self._data,
            [
                QueryFilter.eq("nurse_id", nurse_id),
                QueryFilter.eq("status", AppointmentStatus.COMPLETED.value),
            ],
            "total",
        )
