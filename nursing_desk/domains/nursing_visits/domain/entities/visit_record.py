"""Visit Record Entity.

Notes and vitals captured when an appointment is completed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from nursing_desk.core.domain.entities import Entity

from ..value_objects.vitals import Vitals
from ._parsing import parse_datetime


@dataclass(eq=False)
class VisitRecord(Entity[str]):
    """Row of the `patient_records` collection."""

    appointment_id: str | None = None
    notes: str = ""
    vitals: Vitals = field(default_factory=Vitals)
    recorded_at: datetime | None = None  # Assigned by the server

    @classmethod
    def from_external_data(cls, data: dict[str, Any], appointment_id: str | None = None) -> "VisitRecord":
        raw_vitals = data.get("vitals")
        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            appointment_id=str(data.get("appointment_id") or appointment_id or "") or None,
            notes=data.get("notes") or "",
            vitals=Vitals(readings=dict(raw_vitals)) if isinstance(raw_vitals, dict) else Vitals(),
            recorded_at=parse_datetime(data.get("recorded_at")),
        )

    def to_insert_dict(self) -> dict[str, Any]:
        """Row for insertion; `recorded_at` is left to the server."""
        return {
            "appointment_id": self.appointment_id,
            "notes": self.notes,
            "vitals": self.vitals.to_dict(),
        }
