"""Appointment Entity.

A visit linking one nurse and one patient at a date and time. The only
transition this system performs is Scheduled -> Completed.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any

from nursing_desk.core.domain.entities import Entity
from nursing_desk.core.domain.exceptions import InvalidStatusTransitionException

from ..value_objects.appointment_status import AppointmentStatus
from ._parsing import parse_date, parse_time
from .visit_record import VisitRecord


def _embedded_one(value: Any) -> dict[str, Any]:
    """An embedded relation may arrive as an object or a one-item list."""
    if isinstance(value, dict):
        return value
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return {}


@dataclass(eq=False)
class Appointment(Entity[str]):
    """Row of the `appointments` collection, optionally with embedded relations."""

    patient_id: str | None = None
    nurse_id: str | None = None
    appointment_date: date | None = None
    appointment_time: time | None = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    # Embedded from the patients relation
    patient_first_name: str = ""
    patient_last_name: str = ""

    # Embedded from the patient_records relation (history view only)
    records: list[VisitRecord] = field(default_factory=list)

    def complete(self) -> None:
        """Mark the appointment as completed.

        Raises:
            InvalidStatusTransitionException: If not currently Scheduled.
        """
        if not self.status.can_transition_to(AppointmentStatus.COMPLETED):
            raise InvalidStatusTransitionException(self.status.value, AppointmentStatus.COMPLETED.value)
        self.status = AppointmentStatus.COMPLETED

    @property
    def patient_name(self) -> str:
        return f"{self.patient_first_name} {self.patient_last_name}".strip()

    @property
    def scheduled_at(self) -> datetime | None:
        if self.appointment_date is None or self.appointment_time is None:
            return None
        return datetime.combine(self.appointment_date, self.appointment_time)

    @property
    def sort_key(self) -> tuple[date, time]:
        return (self.appointment_date or date.min, self.appointment_time or time.min)

    def is_on(self, day: date) -> bool:
        return self.appointment_date == day

    @classmethod
    def from_external_data(cls, data: dict[str, Any]) -> "Appointment":
        appointment_id = str(data["id"]) if data.get("id") is not None else None
        patient = _embedded_one(data.get("patients"))
        raw_records = data.get("patient_records") or []
        if isinstance(raw_records, dict):
            raw_records = [raw_records]

        return cls(
            id=appointment_id,
            patient_id=str(data["patient_id"]) if data.get("patient_id") is not None else None,
            nurse_id=str(data["nurse_id"]) if data.get("nurse_id") is not None else None,
            appointment_date=parse_date(data.get("appointment_date")),
            appointment_time=parse_time(data.get("appointment_time")),
            status=AppointmentStatus.parse(data.get("status")) or AppointmentStatus.SCHEDULED,
            patient_first_name=patient.get("first_name") or "",
            patient_last_name=patient.get("last_name") or "",
            records=[
                VisitRecord.from_external_data(item, appointment_id=appointment_id)
                for item in raw_records
                if isinstance(item, dict)
            ],
        )

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "patient_id": self.patient_id,
            "nurse_id": self.nurse_id,
            "appointment_date": self.appointment_date.isoformat() if self.appointment_date else None,
            "appointment_time": self.appointment_time.strftime("%H:%M") if self.appointment_time else None,
            "status": self.status.value,
        }
