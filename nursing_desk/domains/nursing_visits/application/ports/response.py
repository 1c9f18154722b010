# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: External system response type.
# ============================================================================
"""External Response Type.

Contains the ExternalResponse dataclass returned by every port call.
Kept in its own module to avoid circular imports.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ExternalResponse:
    """Structured response from the data service.

    Adapters never raise to callers; failures come back as
    ``success=False`` with an error code and message.
    """

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, data: dict[str, Any] | list[Any] | None = None) -> "ExternalResponse":
        """Factory for successful response."""
        return cls(success=True, data=data)

    @classmethod
    def error(cls, code: str, message: str) -> "ExternalResponse":
        """Factory for error response."""
        return cls(success=False, error_code=code, error_message=message)

    def get_dict(self) -> dict[str, Any]:
        """Get data as dict, returning the first item of list responses."""
        if isinstance(self.data, dict):
            return self.data
        if isinstance(self.data, list) and len(self.data) > 0:
            first = self.data[0]
            if isinstance(first, dict):
                return first
        return {}

    def get_list(self) -> list[Any]:
        """Get data as list, wrapping a dict if needed."""
        if isinstance(self.data, list):
            return self.data
        if isinstance(self.data, dict):
            return [self.data]
        return []
