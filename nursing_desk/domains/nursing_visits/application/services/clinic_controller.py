# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Session-scoped controller wiring use cases to the view state.
# ============================================================================
"""Clinic Controller.

Entry point for the presentation layer. Each method runs one domain
operation, re-fetches whatever the operation invalidated, and replaces
the matching slice of ClinicViewState. Failed reads leave the state
untouched; failed writes apply no local change.

Usage:
    controller = ClinicController(data_service, auth_service)
    await controller.start()
    result = await controller.login("nurse@example.com", "secret")
    await controller.book_appointment(patient_id, date(2025, 1, 10), time(9, 0))
"""

import logging
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from ...domain.entities import NurseSession, Patient
from ..dto.visit_dtos import (
    AddPatientRequest,
    AppointmentDetailsResult,
    AppointmentListResult,
    BookAppointmentRequest,
    CompleteAppointmentRequest,
    CompleteAppointmentResult,
    CountResult,
    ErrorKind,
    ListAppointmentsRequest,
    LoginRequest,
    LoginResult,
    PatientListResult,
    UseCaseResult,
    VisitHistoryResult,
)
from ..ports.auth_port import AuthEvent
from ..use_cases import (
    AddPatientUseCase,
    AuthenticateUseCase,
    BookAppointmentUseCase,
    CompleteAppointmentUseCase,
    CountCompletedTodayUseCase,
    CountCompletedTotalUseCase,
    GetAppointmentDetailsUseCase,
    GetNurseProfileUseCase,
    GetVisitHistoryUseCase,
    ListPastAppointmentsUseCase,
    ListPatientsUseCase,
    ListUpcomingAppointmentsUseCase,
    SearchPatientsUseCase,
    SignOutUseCase,
)
from .view_state import ClinicViewState, NotificationSeverity

if TYPE_CHECKING:
    from ..ports import AuthSubscription, IAuthService, IDataService

logger = logging.getLogger(__name__)

TResult = TypeVar("TResult", bound=UseCaseResult)

NOT_SIGNED_IN = "You are not signed in."


class ClinicController:
    """Runs domain operations for one nurse session and mirrors their results."""

    def __init__(
        self,
        data_service: "IDataService",
        auth_service: "IAuthService",
        state: ClinicViewState | None = None,
        page_size: int | None = 5,
        notification_timeout: float = 3.0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize controller.

        Args:
            data_service: Data service port.
            auth_service: Auth port.
            state: View state to drive; a fresh one when omitted.
            page_size: Cap for the appointment lists, None for unbounded.
            notification_timeout: Seconds a notification stays visible.
            clock: Local wall clock, shared by booking validation and counters.
        """
        self._auth = auth_service
        self._page_size = page_size
        self._notification_timeout = notification_timeout
        self._clock = clock
        self._subscription: "AuthSubscription | None" = None
        self.state = state or ClinicViewState()

        self._authenticate = AuthenticateUseCase(auth_service)
        self._sign_out = SignOutUseCase(auth_service)
        self._list_upcoming = ListUpcomingAppointmentsUseCase(data_service)
        self._list_past = ListPastAppointmentsUseCase(data_service)
        self._count_today = CountCompletedTodayUseCase(data_service, today=lambda: self._clock().date())
        self._count_total = CountCompletedTotalUseCase(data_service)
        self._book = BookAppointmentUseCase(data_service, clock=clock)
        self._details = GetAppointmentDetailsUseCase(data_service)
        self._complete = CompleteAppointmentUseCase(data_service)
        self._list_patients = ListPatientsUseCase(data_service)
        self._search_patients = SearchPatientsUseCase(data_service)
        self._add_patient = AddPatientUseCase(data_service)
        self._history = GetVisitHistoryUseCase(data_service)
        self._nurse_profile = GetNurseProfileUseCase(data_service)

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Subscribe to session changes and resume an existing session."""
        if self._subscription is None:
            self._subscription = self._auth.on_session_change(self.handle_session_change)
        session = await self._auth.get_current_session()
        if session is not None:
            await self._begin_session(session)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def login(self, email: str, password: str) -> LoginResult:
        result = await self._authenticate.execute(LoginRequest(email=email, password=password))
        if result.success and result.session is not None:
            await self._begin_session(result.session)
        return result

    async def logout(self) -> UseCaseResult:
        """Sign out. Local state is cleared even when the remote call fails."""
        try:
            result = await self._sign_out.execute()
        finally:
            self.state.clear_nurse_scope()
        return result

    async def handle_session_change(self, event: AuthEvent, session: NurseSession | None) -> None:
        if event in (AuthEvent.SIGNED_OUT, AuthEvent.SESSION_EXPIRED) or session is None:
            if self.state.is_authenticated:
                logger.info(f"Session ended ({event.value}), clearing nurse state")
            self.state.clear_nurse_scope()
            return
        await self._begin_session(session)

    async def _begin_session(self, session: NurseSession) -> None:
        current = self.state.session
        if current is not None and current.access_token == session.access_token:
            return
        self.state.clear_nurse_scope()
        self.state.session = session
        await self.load_dashboard()

    # =========================================================================
    # Reads
    # =========================================================================

    async def load_dashboard(self) -> list[UseCaseResult]:
        """Initial load. Each read is independent; one failing does not stop the rest."""
        return [
            await self.refresh_upcoming(),
            await self.refresh_past(),
            await self.refresh_completed_today(),
            await self.refresh_completed_total(),
            await self.refresh_patients(),
            await self.refresh_nurse_profile(),
        ]

    async def refresh_upcoming(self) -> AppointmentListResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(AppointmentListResult)
        result = await self._list_upcoming.execute(
            ListAppointmentsRequest(nurse_id=session.user_id, limit=self._page_size)
        )
        if result.success and self._is_current(session):
            self.state.upcoming = result.appointments
        return result

    async def refresh_past(self) -> AppointmentListResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(AppointmentListResult)
        result = await self._list_past.execute(ListAppointmentsRequest(nurse_id=session.user_id, limit=self._page_size))
        if result.success and self._is_current(session):
            self.state.past = result.appointments
        return result

    async def refresh_completed_today(self) -> CountResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(CountResult)
        result = await self._count_today.execute(session.user_id)
        if result.success and self._is_current(session):
            self.state.completed_today = result.count
        return result

    async def refresh_completed_total(self) -> CountResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(CountResult)
        result = await self._count_total.execute(session.user_id)
        if result.success and self._is_current(session):
            self.state.completed_total = result.count
        return result

    async def refresh_patients(self) -> PatientListResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(PatientListResult)
        result = await self._list_patients.execute()
        if result.success and self._is_current(session):
            self.state.patients = result.patients
        return result

    async def refresh_nurse_profile(self) -> UseCaseResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(UseCaseResult)
        result = await self._nurse_profile.execute(session.user_id)
        if result.success and self._is_current(session):
            nurse = result.data
            self.state.nurse_name = (nurse.first_name if nurse else "") or session.email_name
        return result

    async def search_patients(self, term: str | None) -> PatientListResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(PatientListResult)
        result = await self._search_patients.execute(term)
        if result.success and self._is_current(session):
            self.state.patients = result.patients
        return result

    async def view_patient_history(self, patient: Patient) -> VisitHistoryResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(VisitHistoryResult)
        if patient.id is None:
            return VisitHistoryResult(success=False, error_code=ErrorKind.VALIDATION, error_message="Unknown patient")
        result = await self._history.execute(patient.id)
        if result.success and self._is_current(session):
            self.state.history_patient = patient
            self.state.history = result.visits
        return result

    def close_patient_history(self) -> None:
        self.state.history_patient = None
        self.state.history = None

    def view_patient_profile(self, patient: Patient) -> None:
        self.state.selected_profile = patient

    def close_patient_profile(self) -> None:
        self.state.selected_profile = None

    # =========================================================================
    # Writes
    # =========================================================================

    async def book_appointment(
        self,
        patient_id: str | None,
        appointment_date: date | None,
        appointment_time: time | None,
    ) -> UseCaseResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(UseCaseResult)
        result = await self._book.execute(
            BookAppointmentRequest(
                nurse_id=session.user_id,
                patient_id=patient_id,
                appointment_date=appointment_date,
                appointment_time=appointment_time,
            )
        )
        if result.success and self._is_current(session):
            self.state.booking_open = False
            await self.refresh_upcoming()
        return result

    async def open_record_form(self, appointment_id: str) -> AppointmentDetailsResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(AppointmentDetailsResult)
        result = await self._details.execute(appointment_id, session.user_id)
        if result.success and self._is_current(session):
            self.state.record_appointment = result.appointment
        return result

    def close_record_form(self) -> None:
        self.state.record_appointment = None

    async def complete_appointment(
        self,
        notes: str | None,
        vitals: str | dict[str, Any] | None = None,
        appointment_id: str | None = None,
    ) -> CompleteAppointmentResult:
        """Complete the appointment in the record form (or ``appointment_id``).

        An appointment the form already shows as no longer Scheduled is
        rejected before anything is written. On full success the form
        closes and the lists and both counters are re-fetched. A partial
        failure leaves the form open and raises a warning notification.
        """
        session = self.state.session
        if session is None:
            return self._not_signed_in(CompleteAppointmentResult)

        current = self.state.record_appointment
        if appointment_id is None and current is not None:
            appointment_id = current.id
        known_status = current.status if current is not None and current.id == appointment_id else None

        result = await self._complete.execute(
            CompleteAppointmentRequest(
                nurse_id=session.user_id,
                appointment_id=appointment_id,
                notes=notes,
                vitals=vitals,
                status=known_status,
            )
        )
        if not self._is_current(session):
            return result

        if result.is_partial_failure:
            self._notify(result.error_message or "", NotificationSeverity.WARNING)
            return result
        if not result.success:
            return result

        self.close_record_form()
        await self.refresh_upcoming()
        await self.refresh_past()
        await self.refresh_completed_today()
        await self.refresh_completed_total()
        return result

    async def add_patient(
        self,
        first_name: str | None,
        last_name: str | None,
        date_of_birth: date | None,
        address: str | None = None,
        phone_number: str | None = None,
        emergency_contact: str | None = None,
    ) -> UseCaseResult:
        session = self.state.session
        if session is None:
            return self._not_signed_in(UseCaseResult)
        result = await self._add_patient.execute(
            AddPatientRequest(
                first_name=first_name,
                last_name=last_name,
                date_of_birth=date_of_birth,
                address=address,
                phone_number=phone_number,
                emergency_contact=emergency_contact,
            )
        )
        if not self._is_current(session):
            return result
        if not result.success:
            self._notify(result.error_message or "Failed to add patient", NotificationSeverity.ERROR)
            return result

        self.state.add_patient_open = False
        await self.refresh_patients()
        self._notify("Patient added successfully", NotificationSeverity.SUCCESS)
        return result

    # =========================================================================
    # Dialogs
    # =========================================================================

    def open_booking(self) -> None:
        self.state.booking_open = True

    def close_booking(self) -> None:
        self.state.booking_open = False

    def open_patient_search(self) -> None:
        self.state.patient_search_open = True

    def close_patient_search(self) -> None:
        self.state.patient_search_open = False

    def open_add_patient(self) -> None:
        self.state.add_patient_open = True

    def close_add_patient(self) -> None:
        self.state.add_patient_open = False

    # =========================================================================
    # Helpers
    # =========================================================================

    def _notify(self, message: str, severity: NotificationSeverity) -> None:
        self.state.notify(message, severity, ttl=self._notification_timeout, now=self._clock())

    @staticmethod
    def _not_signed_in(result_cls: type[TResult]) -> TResult:
        return result_cls(success=False, error_code=ErrorKind.AUTH, error_message=NOT_SIGNED_IN)

    def _is_current(self, session: NurseSession) -> bool:
        """True while ``session`` is still the one the state belongs to."""
        return self.state.session is session
