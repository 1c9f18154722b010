# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Application layer exports.
# ============================================================================
"""Application Layer - Nursing Visits.

Contains use cases, ports (interfaces), DTOs and the session-scoped
controller for the nursing visits domain.
"""

from .dto import (
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
from .ports import ExternalResponse, IAuthService, IDataService
from .services import ClinicController, ClinicViewState

__all__ = [
    # Ports
    "ExternalResponse",
    "IAuthService",
    "IDataService",
    # Requests
    "AddPatientRequest",
    "BookAppointmentRequest",
    "CompleteAppointmentRequest",
    "ListAppointmentsRequest",
    "LoginRequest",
    # Results
    "AppointmentDetailsResult",
    "AppointmentListResult",
    "CompleteAppointmentResult",
    "CompletionPhase",
    "CountResult",
    "ErrorKind",
    "LoginResult",
    "PatientListResult",
    "UseCaseResult",
    "VisitHistoryResult",
    # Services
    "ClinicController",
    "ClinicViewState",
]
