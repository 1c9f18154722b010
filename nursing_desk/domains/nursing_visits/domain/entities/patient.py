"""Patient Entity.

A person under the practice's care. Created by the add-patient flow and
never deleted by this system.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from nursing_desk.core.domain.entities import Entity

from ._parsing import parse_date


@dataclass(eq=False)
class Patient(Entity[str]):
    """Patient record as stored in the `patients` collection."""

    first_name: str = ""
    last_name: str = ""
    date_of_birth: date | None = None
    address: str | None = None
    phone_number: str | None = None
    emergency_contact: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_external_data(cls, data: dict[str, Any]) -> "Patient":
        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            date_of_birth=parse_date(data.get("date_of_birth")),
            address=data.get("address") or None,
            phone_number=data.get("phone_number") or None,
            emergency_contact=data.get("emergency_contact") or None,
        )

    def to_insert_dict(self) -> dict[str, Any]:
        """Row for the `patients` collection; omitted optionals are stored as null."""
        row: dict[str, Any] = {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "address": self.address or None,
            "phone_number": self.phone_number or None,
        }
        if self.emergency_contact:
            row["emergency_contact"] = self.emergency_contact
        return row
