# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Session-scoped view state mirrored from use case results.
# ============================================================================
"""Clinic View State.

Holds the latest results of the domain operations for one nurse session:
appointment lists, counters, the patient directory, dialog flags and a
transient notification. Each slice is replaced wholesale on refresh.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum

from ...domain.entities import Appointment, NurseSession, Patient
from ...domain.value_objects import AppointmentStatus


class NotificationSeverity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A message that dismisses itself once ``expires_at`` has passed."""

    message: str
    severity: NotificationSeverity
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class DashboardStats:
    today_appointments: int
    pending_appointments: int
    completed_today: int
    completed_total: int


@dataclass(frozen=True)
class HistorySummary:
    completed_visits: int
    upcoming_visits: int


@dataclass
class ClinicViewState:
    """Everything the presentation layer renders for the signed-in nurse."""

    session: NurseSession | None = None
    nurse_name: str = ""

    upcoming: list[Appointment] = field(default_factory=list)
    past: list[Appointment] = field(default_factory=list)
    completed_today: int = 0
    completed_total: int = 0
    patients: list[Patient] = field(default_factory=list)

    # Dialogs
    booking_open: bool = False
    patient_search_open: bool = False
    add_patient_open: bool = False
    record_appointment: Appointment | None = None
    selected_profile: Patient | None = None
    history_patient: Patient | None = None
    history: list[Appointment] | None = None

    notification: Notification | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def record_form_open(self) -> bool:
        return self.record_appointment is not None

    def clear_nurse_scope(self) -> None:
        """Drop the session and everything fetched for it."""
        fresh = ClinicViewState()
        for name in self.__dataclass_fields__:
            setattr(self, name, getattr(fresh, name))

    def notify(
        self,
        message: str,
        severity: NotificationSeverity,
        ttl: float,
        now: datetime,
    ) -> Notification:
        self.notification = Notification(message, severity, now + timedelta(seconds=ttl))
        return self.notification

    def active_notification(self, now: datetime) -> Notification | None:
        """Current notification, dismissing it once expired."""
        if self.notification is not None and not self.notification.is_active(now):
            self.notification = None
        return self.notification

    def stats(self, today: date) -> DashboardStats:
        return DashboardStats(
            today_appointments=sum(1 for a in self.upcoming if a.is_on(today)),
            pending_appointments=sum(1 for a in self.upcoming if a.status == AppointmentStatus.SCHEDULED),
            completed_today=self.completed_today,
            completed_total=self.completed_total,
        )


def history_for_display(visits: list[Appointment]) -> list[Appointment]:
    """Most recent visit first."""
    return sorted(visits, key=lambda visit: visit.sort_key, reverse=True)


def summarize_history(visits: list[Appointment]) -> HistorySummary:
    return HistorySummary(
        completed_visits=sum(1 for v in visits if v.status == AppointmentStatus.COMPLETED),
        upcoming_visits=sum(1 for v in visits if v.status == AppointmentStatus.SCHEDULED),
    )


def booking_time_slots(start_hour: int = 8, end_hour: int = 18, step_minutes: int = 30) -> list[time]:
    """Bookable times of day, 08:00 to 17:30 by default."""
    slots: list[time] = []
    minutes = start_hour * 60
    while minutes < end_hour * 60:
        slots.append(time(minutes // 60, minutes % 60))
        minutes += step_minutes
    return slots
