"""Appointment Status Value Object.

Defines the states of an appointment and the transitions this system performs.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Appointment states as stored in the remote `appointments.status` column."""

    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"  # Reserved, no operation produces or consumes it

    @classmethod
    def parse(cls, value: str | None) -> "AppointmentStatus | None":
        """Case-insensitive lookup, None for unknown values."""
        if not value:
            return None
        for status in cls:
            if status.value.lower() == value.strip().lower():
                return status
        return None

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Validate a status transition.

        State machine:
        - Scheduled -> Completed
        - Completed -> (final state)
        - Cancelled -> (final state)
        """
        transitions: dict[str, list[str]] = {
            "Scheduled": ["Completed"],
            "Completed": [],
            "Cancelled": [],
        }
        return new_status.value in transitions.get(self.value, [])

    def is_final(self) -> bool:
        return self.value in ["Completed", "Cancelled"]
