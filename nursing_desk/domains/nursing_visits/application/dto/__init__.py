"""Data Transfer Objects for the Nursing Visits domain."""

from .visit_dtos import (
    AddPatientRequest,
    AppointmentDetailsResult,
    AppointmentListResult,
    BookAppointmentRequest,
    CompleteAppointmentRequest,
    CompleteAppointmentResult,
    CompletionPhase,
    CountResult,
    ErrorKind,
    ListAppointmentsRequest,
    LoginRequest,
    LoginResult,
    PatientListResult,
    UseCaseResult,
    VisitHistoryResult,
)

__all__ = [
    # Requests
    "LoginRequest",
    "ListAppointmentsRequest",
    "BookAppointmentRequest",
    "CompleteAppointmentRequest",
    "AddPatientRequest",
    # Results
    "ErrorKind",
    "UseCaseResult",
    "LoginResult",
    "AppointmentListResult",
    "AppointmentDetailsResult",
    "CountResult",
    "PatientListResult",
    "VisitHistoryResult",
    "CompletionPhase",
    "CompleteAppointmentResult",
]
