"""Nurse and session entities.

The nurse is the authenticated operator; the session binds one nurse to
an access credential for the duration of use.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from nursing_desk.core.domain.entities import Entity


@dataclass(eq=False)
class Nurse(Entity[str]):
    """Row of the `nurses` collection. Read-only here."""

    first_name: str = ""

    @classmethod
    def from_external_data(cls, data: dict[str, Any]) -> "Nurse":
        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            first_name=data.get("first_name") or "",
        )


@dataclass(frozen=True)
class NurseSession:
    """Authenticated identity. `user_id` equals the nurse's id."""

    access_token: str
    user_id: str
    email: str = ""
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) >= self.expires_at

    @property
    def email_name(self) -> str:
        """Local part of the e-mail address, used when no profile name exists."""
        return self.email.split("@", 1)[0] if self.email else ""

    @classmethod
    def from_external_data(cls, data: dict[str, Any]) -> "NurseSession":
        """Build from a GoTrue token response."""
        user = data.get("user") or {}
        expires_at: datetime | None = None
        if data.get("expires_at"):
            expires_at = datetime.fromtimestamp(int(data["expires_at"]), tz=UTC)
        elif data.get("expires_in"):
            expires_at = datetime.now(UTC) + timedelta(seconds=int(data["expires_in"]))
        return cls(
            access_token=data.get("access_token") or "",
            user_id=str(user.get("id") or ""),
            email=user.get("email") or "",
            expires_at=expires_at,
        )
