# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Utility for extracting data from ExternalResponse consistently
# ============================================================================
"""Response extraction utility.

Provides consistent patterns for extracting data from ExternalResponse
objects and for translating their failures into the result taxonomy.
"""

from typing import TYPE_CHECKING, Any

from ..dto.visit_dtos import ErrorKind

if TYPE_CHECKING:
    from ..ports.response import ExternalResponse


class ResponseExtractor:
    """Utility for reading ExternalResponse payloads.

    Example:
        >>> response = await data.count(Collection.APPOINTMENTS, filters)
        >>> total = ResponseExtractor.get_count(response.data)
    """

    @staticmethod
    def as_dict(data: Any) -> dict[str, Any]:
        """Extract a dictionary from response data (first item of a list)."""
        if isinstance(data, dict):
            return data
        if isinstance(data, list) and data:
            first_item = data[0]
            return first_item if isinstance(first_item, dict) else {}
        return {}

    @staticmethod
    def as_list(data: Any) -> list[dict[str, Any]]:
        """Extract a list of dictionaries from response data."""
        if isinstance(data, list):
            return [item for item in data if isinstance(item, dict)]
        if isinstance(data, dict):
            return [data]
        return []

    @staticmethod
    def get_count(data: Any) -> int:
        """Read ``{"count": n}`` payloads; anything else counts as zero."""
        value = ResponseExtractor.as_dict(data).get("count")
        try:
            return int(value) if value is not None else 0
        except (TypeError, ValueError):
            return 0

    @staticmethod
    def error_kind(response: "ExternalResponse") -> ErrorKind:
        """Classify a failed response: rejected credentials vs any other remote failure."""
        if response.error_code == "AUTH_ERROR":
            return ErrorKind.AUTH
        return ErrorKind.REMOTE

    @staticmethod
    def error_message(response: "ExternalResponse", fallback: str) -> str:
        return response.error_message or fallback
