# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use Cases exports.
# ============================================================================
"""Application Use Cases for the Nursing Visits domain."""

from .add_patient import AddPatientUseCase
from .authenticate import AuthenticateUseCase, SignOutUseCase
from .book_appointment import BookAppointmentUseCase
from .complete_appointment import CompleteAppointmentUseCase
from .count_completions import CountCompletedTodayUseCase, CountCompletedTotalUseCase
from .get_appointment_details import GetAppointmentDetailsUseCase
from .get_nurse_profile import GetNurseProfileUseCase
from .get_visit_history import GetVisitHistoryUseCase
from .list_appointments import ListPastAppointmentsUseCase, ListUpcomingAppointmentsUseCase
from .list_patients import ListPatientsUseCase, SearchPatientsUseCase

__all__ = [
    "AddPatientUseCase",
    "AuthenticateUseCase",
    "BookAppointmentUseCase",
    "CompleteAppointmentUseCase",
    "CountCompletedTodayUseCase",
    "CountCompletedTotalUseCase",
    "GetAppointmentDetailsUseCase",
    "GetNurseProfileUseCase",
    "GetVisitHistoryUseCase",
    "ListPastAppointmentsUseCase",
    "ListPatientsUseCase",
    "ListUpcomingAppointmentsUseCase",
    "SearchPatientsUseCase",
    "SignOutUseCase",
]
