"""Vitals Value Object.

Structured key/value measurements captured with a visit record.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from nursing_desk.core.domain.exceptions import ValidationException


@dataclass(frozen=True)
class Vitals:
    """Immutable mapping of vital sign name to measured value.

    Keys are arbitrary (e.g. "bp", "temp", "pulse"); values are whatever
    JSON value the nurse entered.
    """

    readings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: "str | dict[str, Any] | Vitals | None") -> "Vitals":
        """Build vitals from form input.

        Accepts JSON text, an already structured mapping, or nothing.
        Empty or whitespace-only text means no vitals.

        Raises:
            ValidationException: If the text is not JSON or not a JSON object.
        """
        if raw is None:
            return cls()
        if isinstance(raw, Vitals):
            return raw
        if isinstance(raw, dict):
            return cls(readings=dict(raw))
        if not isinstance(raw, str):
            raise ValidationException("Vitals must be a JSON object", field="vitals")
        if not raw.strip():
            return cls()

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationException(f"Vitals are not valid JSON: {e.msg}", field="vitals") from e

        if not isinstance(parsed, dict):
            raise ValidationException("Vitals must be a JSON object, e.g. {\"bp\": \"120/80\"}", field="vitals")
        return cls(readings=parsed)

    @property
    def is_empty(self) -> bool:
        return not self.readings

    def to_dict(self) -> dict[str, Any]:
        return dict(self.readings)

    def format(self) -> str:
        """Human-readable rendering, e.g. "BP: 120/80, TEMP: 98.6"."""
        if self.is_empty:
            return "No vitals recorded"
        return ", ".join(f"{key.upper()}: {value}" for key, value in self.readings.items())
