# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Data Transfer Objects for use case input and output.
# ============================================================================
"""Visit DTOs.

Request and result objects for authentication, appointment listing,
booking, completion, and the patient directory.
"""

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Any

from ...domain.entities import Appointment, NurseSession, Patient
from ...domain.value_objects import AppointmentStatus

# =============================================================================
# Request DTOs
# =============================================================================


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str


@dataclass(frozen=True)
class ListAppointmentsRequest:
    """Request DTO for the upcoming/past lists."""

    nurse_id: str
    limit: int | None = 5  # None = unbounded


@dataclass(frozen=True)
class BookAppointmentRequest:
    """Request DTO for booking a new appointment."""

    nurse_id: str
    patient_id: str | None
    appointment_date: date | None
    appointment_time: time | None


@dataclass(frozen=True)
class CompleteAppointmentRequest:
    """Request DTO for completing an appointment with a visit record.

    ``vitals`` is the raw form input: JSON text, a mapping, or None.
    ``status`` is the appointment status the caller last saw, if any.
    """

    nurse_id: str
    appointment_id: str | None
    notes: str | None
    vitals: str | dict[str, Any] | None = None
    status: AppointmentStatus | None = None


@dataclass(frozen=True)
class AddPatientRequest:
    """Request DTO for adding a patient to the directory."""

    first_name: str | None
    last_name: str | None
    date_of_birth: date | None
    address: str | None = None
    phone_number: str | None = None
    emergency_contact: str | None = None


# =============================================================================
# Result DTOs
# =============================================================================


class ErrorKind(str, Enum):
    """Failure taxonomy shared by every use case."""

    VALIDATION = "VALIDATION_ERROR"  # Precondition failed, nothing sent
    REMOTE = "REMOTE_ERROR"  # A single data service call failed
    PARTIAL_FAILURE = "PARTIAL_FAILURE"  # A multi-step write stopped midway
    AUTH = "AUTH_ERROR"  # Credentials rejected or no session


@dataclass
class UseCaseResult:
    """Generic result for use case operations."""

    success: bool
    data: Any | None = None
    error_code: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, data: Any = None, **kwargs: Any) -> "UseCaseResult":
        """Create successful result."""
        return cls(success=True, data=data, **kwargs)

    @classmethod
    def error(cls, code: ErrorKind, message: str, **kwargs: Any) -> "UseCaseResult":
        """Create error result."""
        return cls(success=False, error_code=code, error_message=message, **kwargs)

    @property
    def is_partial_failure(self) -> bool:
        return self.error_code == ErrorKind.PARTIAL_FAILURE


@dataclass
class LoginResult(UseCaseResult):
    session: NurseSession | None = None


@dataclass
class AppointmentListResult(UseCaseResult):
    appointments: list[Appointment] = field(default_factory=list)


@dataclass
class AppointmentDetailsResult(UseCaseResult):
    appointment: Appointment | None = None


@dataclass
class CountResult(UseCaseResult):
    count: int = 0


@dataclass
class PatientListResult(UseCaseResult):
    patients: list[Patient] = field(default_factory=list)


@dataclass
class VisitHistoryResult(UseCaseResult):
    """Visits in fetch order (date, time ascending), each with its records."""

    visits: list[Appointment] = field(default_factory=list)


class CompletionPhase(str, Enum):
    """Progress of the two-step completion write.

    PENDING -> RECORD_WRITTEN -> STATUS_UPDATED on success;
    PENDING -> FAILED when nothing was written;
    RECORD_WRITTEN -> FAILED is the partial failure.
    """

    PENDING = "pending"
    RECORD_WRITTEN = "record_written"
    STATUS_UPDATED = "status_updated"
    FAILED = "failed"


@dataclass
class CompleteAppointmentResult(UseCaseResult):
    phase: CompletionPhase = CompletionPhase.PENDING
    record_written: bool = False
