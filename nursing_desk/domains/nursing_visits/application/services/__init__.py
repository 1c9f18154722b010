"""Application services for the Nursing Visits domain."""

from .clinic_controller import ClinicController
from .view_state import (
    ClinicViewState,
    DashboardStats,
    HistorySummary,
    Notification,
    NotificationSeverity,
    booking_time_slots,
    history_for_display,
    summarize_history,
)

__all__ = [
    "ClinicController",
    "ClinicViewState",
    "DashboardStats",
    "HistorySummary",
    "Notification",
    "NotificationSeverity",
    "booking_time_slots",
    "history_for_display",
    "summarize_history",
]
