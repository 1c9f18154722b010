"""
Unit tests for Nursing Visits Use Cases.

Tests:
- AuthenticateUseCase / SignOutUseCase
- ListUpcomingAppointmentsUseCase / ListPastAppointmentsUseCase
- CountCompletedTodayUseCase / CountCompletedTotalUseCase
- BookAppointmentUseCase
- CompleteAppointmentUseCase
- ListPatientsUseCase / SearchPatientsUseCase / AddPatientUseCase
- GetAppointmentDetailsUseCase / GetVisitHistoryUseCase / GetNurseProfileUseCase
"""

from datetime import date, time

import pytest

from nursing_desk.domains.nursing_visits.application.dto import (
    AddPatientRequest,
    BookAppointmentRequest,
    CompleteAppointmentRequest,
    CompletionPhase,
    ErrorKind,
    ListAppointmentsRequest,
    LoginRequest,
)
from nursing_desk.domains.nursing_visits.application.ports import (
    Collection,
    ExternalResponse,
    FilterOperator,
    OrderBy,
    QueryFilter,
)
from nursing_desk.domains.nursing_visits.application.use_cases import (
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
from nursing_desk.domains.nursing_visits.application.use_cases.complete_appointment import (
    PARTIAL_FAILURE_MESSAGE,
    RECORD_NOT_SAVED_MESSAGE,
)
from nursing_desk.domains.nursing_visits.domain.value_objects import AppointmentStatus

NURSE_ID = "nurse-1"


# ============================================================================
# Authentication
# ============================================================================


class TestAuthenticateUseCase:
    """Tests for AuthenticateUseCase."""

    @pytest.mark.asyncio
    async def test_sign_in_success(self, mock_auth_service, token_payload) -> None:
        """Should map the token payload to a session."""
        mock_auth_service.sign_in.return_value = ExternalResponse.ok(token_payload)

        result = await AuthenticateUseCase(mock_auth_service).execute(
            LoginRequest(email=" jane.doe@clinic.test ", password="secret")
        )

        assert result.success is True
        assert result.session.user_id == NURSE_ID
        mock_auth_service.sign_in.assert_awaited_once_with("jane.doe@clinic.test", "secret")

    @pytest.mark.asyncio
    async def test_rejected_credentials(self, mock_auth_service) -> None:
        """Should surface the remote message as an auth error."""
        mock_auth_service.sign_in.return_value = ExternalResponse.error("AUTH_ERROR", "Invalid login credentials")

        result = await AuthenticateUseCase(mock_auth_service).execute(
            LoginRequest(email="jane.doe@clinic.test", password="wrong")
        )

        assert result.success is False
        assert result.error_code == ErrorKind.AUTH
        assert result.error_message == "Invalid login credentials"
        assert result.session is None

    @pytest.mark.asyncio
    async def test_missing_password_makes_no_call(self, mock_auth_service) -> None:
        result = await AuthenticateUseCase(mock_auth_service).execute(LoginRequest(email="a@b.c", password=""))

        assert result.error_code == ErrorKind.VALIDATION
        mock_auth_service.sign_in.assert_not_called()

    @pytest.mark.asyncio
    async def test_payload_without_user_is_rejected(self, mock_auth_service) -> None:
        mock_auth_service.sign_in.return_value = ExternalResponse.ok({"access_token": "t"})

        result = await AuthenticateUseCase(mock_auth_service).execute(LoginRequest(email="a@b.c", password="p"))

        assert result.success is False
        assert result.error_code == ErrorKind.AUTH


class TestSignOutUseCase:
    """Tests for SignOutUseCase."""

    @pytest.mark.asyncio
    async def test_remote_failure_is_reported(self, mock_auth_service) -> None:
        mock_auth_service.sign_out.return_value = ExternalResponse.error("CONNECTION_ERROR", "offline")

        result = await SignOutUseCase(mock_auth_service).execute()

        assert result.success is False
        assert result.error_code == ErrorKind.REMOTE
        assert result.error_message == "offline"


# ============================================================================
# Appointment lists
# ============================================================================


class TestListAppointments:
    """Tests for the upcoming and past list use cases."""

    @pytest.mark.asyncio
    async def test_upcoming_query(self, mock_data_service) -> None:
        """Should ask for Scheduled rows of the nurse, soonest first, capped."""
        await ListUpcomingAppointmentsUseCase(mock_data_service).execute(
            ListAppointmentsRequest(nurse_id=NURSE_ID, limit=5)
        )

        args, kwargs = mock_data_service.query.call_args
        assert args[0] == Collection.APPOINTMENTS
        assert kwargs["filters"] == [
            QueryFilter.eq("nurse_id", NURSE_ID),
            QueryFilter.eq("status", "Scheduled"),
        ]
        assert kwargs["ordering"] == [OrderBy("appointment_date", True), OrderBy("appointment_time", True)]
        assert kwargs["limit"] == 5
        assert "patients(first_name, last_name)" in kwargs["columns"]

    @pytest.mark.asyncio
    async def test_past_query_is_descending(self, mock_data_service) -> None:
        await ListPastAppointmentsUseCase(mock_data_service).execute(
            ListAppointmentsRequest(nurse_id=NURSE_ID, limit=None)
        )

        _, kwargs = mock_data_service.query.call_args
        assert kwargs["filters"][1] == QueryFilter.eq("status", "Completed")
        assert kwargs["ordering"] == [OrderBy("appointment_date", False), OrderBy("appointment_time", False)]
        assert kwargs["limit"] is None

    @pytest.mark.asyncio
    async def test_duplicate_rows_are_dropped(self, mock_data_service, make_appointment_row) -> None:
        """A fanned-out join must not produce duplicate list items."""
        first = make_appointment_row("appt-1")
        mock_data_service.query.return_value = ExternalResponse.ok(
            [
                first,
                make_appointment_row("appt-1", first_name="Duplicate"),
                make_appointment_row("appt-2", appointment_time=time(11, 0)),
            ]
        )

        result = await ListUpcomingAppointmentsUseCase(mock_data_service).execute(
            ListAppointmentsRequest(nurse_id=NURSE_ID)
        )

        assert result.success is True
        assert [a.id for a in result.appointments] == ["appt-1", "appt-2"]
        assert result.appointments[0].patient_first_name == "Ada"

    @pytest.mark.asyncio
    async def test_rows_with_other_status_are_excluded(self, mock_data_service, make_appointment_row) -> None:
        mock_data_service.query.return_value = ExternalResponse.ok(
            [
                make_appointment_row("appt-1"),
                make_appointment_row("appt-2", status="Completed"),
            ]
        )

        result = await ListUpcomingAppointmentsUseCase(mock_data_service).execute(
            ListAppointmentsRequest(nurse_id=NURSE_ID)
        )

        assert [a.id for a in result.appointments] == ["appt-1"]
        assert all(a.status == AppointmentStatus.SCHEDULED for a in result.appointments)

    @pytest.mark.asyncio
    async def test_remote_failure(self, mock_data_service) -> None:
        mock_data_service.query.return_value = ExternalResponse.error("HTTP_500", "boom")

        result = await ListPastAppointmentsUseCase(mock_data_service).execute(
            ListAppointmentsRequest(nurse_id=NURSE_ID)
        )

        assert result.success is False
        assert result.error_code == ErrorKind.REMOTE
        assert result.appointments == []


# ============================================================================
# Counters
# ============================================================================


class TestCountCompletions:
    """Tests for the completion counters."""

    @pytest.mark.asyncio
    async def test_today_counter_filters_by_local_date(self, mock_data_service) -> None:
        mock_data_service.count.return_value = ExternalResponse.ok({"count": 3})

        result = await CountCompletedTodayUseCase(mock_data_service, today=lambda: date(2025, 3, 10)).execute(
            NURSE_ID
        )

        assert result.count == 3
        mock_data_service.count.assert_awaited_once_with(
            Collection.APPOINTMENTS,
            filters=[
                QueryFilter.eq("nurse_id", NURSE_ID),
                QueryFilter.eq("status", "Completed"),
                QueryFilter.eq("appointment_date", "2025-03-10"),
            ],
        )

    @pytest.mark.asyncio
    async def test_total_counter_is_not_capped(self, mock_data_service) -> None:
        """The total comes from a count read, independent of list page size."""
        mock_data_service.count.return_value = ExternalResponse.ok({"count": 42})

        result = await CountCompletedTotalUseCase(mock_data_service).execute(NURSE_ID)

        assert result.success is True
        assert result.count == 42
        mock_data_service.query.assert_not_called()

    @pytest.mark.asyncio
    async def test_counter_failure(self, mock_data_service) -> None:
        mock_data_service.count.return_value = ExternalResponse.error("TIMEOUT", "slow")

        result = await CountCompletedTotalUseCase(mock_data_service).execute(NURSE_ID)

        assert result.success is False
        assert result.count == 0


# ============================================================================
# Booking
# ============================================================================


class TestBookAppointmentUseCase:
    """Tests for BookAppointmentUseCase."""

    @pytest.mark.asyncio
    async def test_books_future_slot(self, mock_data_service, clock) -> None:
        request = BookAppointmentRequest(
            nurse_id=NURSE_ID,
            patient_id="patient-1",
            appointment_date=date(2025, 3, 11),
            appointment_time=time(8, 30),
        )

        result = await BookAppointmentUseCase(mock_data_service, clock=clock).execute(request)

        assert result.success is True
        mock_data_service.insert.assert_awaited_once_with(
            Collection.APPOINTMENTS,
            {
                "patient_id": "patient-1",
                "nurse_id": NURSE_ID,
                "appointment_date": "2025-03-11",
                "appointment_time": "08:30",
                "status": "Scheduled",
            },
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("slot", [time(8, 30), time(9, 0)])
    async def test_past_or_present_slot_is_rejected(self, mock_data_service, clock, slot: time) -> None:
        """Now is 09:00; 08:30 and 09:00 today are both rejected."""
        request = BookAppointmentRequest(
            nurse_id=NURSE_ID,
            patient_id="patient-1",
            appointment_date=date(2025, 3, 10),
            appointment_time=slot,
        )

        result = await BookAppointmentUseCase(mock_data_service, clock=clock).execute(request)

        assert result.success is False
        assert result.error_code == ErrorKind.VALIDATION
        assert result.error_message == "Please select a future date and time"
        mock_data_service.insert.assert_not_called()

    def test_one_minute_from_now_is_accepted(self, mock_data_service, clock) -> None:
        request = BookAppointmentRequest(
            nurse_id=NURSE_ID,
            patient_id="patient-1",
            appointment_date=date(2025, 3, 10),
            appointment_time=time(9, 1),
        )

        validation = BookAppointmentUseCase(mock_data_service, clock=clock).validate(request)

        assert validation.success is True

    @pytest.mark.asyncio
    async def test_missing_fields(self, mock_data_service, clock) -> None:
        request = BookAppointmentRequest(
            nurse_id=NURSE_ID, patient_id=None, appointment_date=date(2025, 3, 11), appointment_time=time(9, 0)
        )

        result = await BookAppointmentUseCase(mock_data_service, clock=clock).execute(request)

        assert result.error_message == "Please fill in all fields"
        mock_data_service.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_failure(self, mock_data_service, clock) -> None:
        mock_data_service.insert.return_value = ExternalResponse.error("HTTP_409", "conflict")
        request = BookAppointmentRequest(
            nurse_id=NURSE_ID, patient_id="patient-1", appointment_date=date(2025, 3, 11), appointment_time=time(9, 0)
        )

        result = await BookAppointmentUseCase(mock_data_service, clock=clock).execute(request)

        assert result.success is False
        assert result.error_code == ErrorKind.REMOTE
        assert result.error_message == "Booking failed. Try again!"


# ============================================================================
# Completion
# ============================================================================


class TestCompleteAppointmentUseCase:
    """Tests for the two-step completion write."""

    def _request(self, notes: str | None = "Wound healing well", vitals=None, status=None) -> CompleteAppointmentRequest:
        return CompleteAppointmentRequest(
            nurse_id=NURSE_ID, appointment_id="appt-1", notes=notes, vitals=vitals, status=status
        )

    @pytest.mark.asyncio
    async def test_record_then_status(self, mock_data_service) -> None:
        """Should insert the record before flipping the status."""
        result = await CompleteAppointmentUseCase(mock_data_service).execute(
            self._request(vitals='{"bp": "120/80"}')
        )

        assert result.success is True
        assert result.phase == CompletionPhase.STATUS_UPDATED
        assert result.record_written is True

        mock_data_service.insert.assert_awaited_once_with(
            Collection.PATIENT_RECORDS,
            {"appointment_id": "appt-1", "notes": "Wound healing well", "vitals": {"bp": "120/80"}},
        )
        mock_data_service.update.assert_awaited_once_with(
            Collection.APPOINTMENTS,
            {"status": "Completed"},
            filters=[
                QueryFilter.eq("id", "appt-1"),
                QueryFilter.eq("nurse_id", NURSE_ID),
                QueryFilter.eq("status", "Scheduled"),
            ],
        )
        call_names = [name for name, _, _ in mock_data_service.mock_calls]
        assert call_names.index("insert") < call_names.index("update")

    @pytest.mark.asyncio
    async def test_empty_vitals_stored_as_empty_object(self, mock_data_service) -> None:
        await CompleteAppointmentUseCase(mock_data_service).execute(self._request(vitals="  "))

        _, record = mock_data_service.insert.call_args.args
        assert record["vitals"] == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("notes", [None, "", "   "])
    async def test_blank_notes_make_no_call(self, mock_data_service, notes) -> None:
        result = await CompleteAppointmentUseCase(mock_data_service).execute(self._request(notes=notes))

        assert result.error_code == ErrorKind.VALIDATION
        assert result.phase == CompletionPhase.PENDING
        mock_data_service.insert.assert_not_called()
        mock_data_service.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_vitals_make_no_call(self, mock_data_service) -> None:
        result = await CompleteAppointmentUseCase(mock_data_service).execute(self._request(vitals="[1, 2]"))

        assert result.error_code == ErrorKind.VALIDATION
        mock_data_service.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_record_insert_failure_skips_status_update(self, mock_data_service) -> None:
        mock_data_service.insert.return_value = ExternalResponse.error("HTTP_500", "boom")

        result = await CompleteAppointmentUseCase(mock_data_service).execute(self._request())

        assert result.success is False
        assert result.error_code == ErrorKind.REMOTE
        assert result.error_message == RECORD_NOT_SAVED_MESSAGE
        assert result.phase == CompletionPhase.FAILED
        assert result.record_written is False
        mock_data_service.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_status_update_failure_is_partial(self, mock_data_service) -> None:
        """The record stays; nothing is rolled back."""
        mock_data_service.update.return_value = ExternalResponse.error("CONNECTION_ERROR", "offline")

        result = await CompleteAppointmentUseCase(mock_data_service).execute(self._request())

        assert result.success is False
        assert result.is_partial_failure
        assert result.error_message == PARTIAL_FAILURE_MESSAGE
        assert result.phase == CompletionPhase.FAILED
        assert result.record_written is True
        mock_data_service.insert.assert_awaited_once()
        assert mock_data_service.update.await_count == 1

    @pytest.mark.asyncio
    async def test_update_matching_no_rows_is_partial(self, mock_data_service) -> None:
        mock_data_service.update.return_value = ExternalResponse.ok([])

        result = await CompleteAppointmentUseCase(mock_data_service).execute(self._request())

        assert result.is_partial_failure
        assert result.record_written is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED])
    async def test_final_status_makes_no_call(self, mock_data_service, status) -> None:
        result = await CompleteAppointmentUseCase(mock_data_service).execute(self._request(status=status))

        assert result.error_code == ErrorKind.VALIDATION
        assert result.error_message == f"This appointment is already {status.value}."
        assert result.phase == CompletionPhase.PENDING
        mock_data_service.insert.assert_not_called()
        mock_data_service.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_known_scheduled_status_proceeds(self, mock_data_service) -> None:
        result = await CompleteAppointmentUseCase(mock_data_service).execute(
            self._request(status=AppointmentStatus.SCHEDULED)
        )

        assert result.success is True
        mock_data_service.insert.assert_awaited_once()


# ============================================================================
# Patient directory
# ============================================================================


class TestPatientDirectory:
    """Tests for listing, searching and adding patients."""

    @pytest.mark.asyncio
    async def test_list_all(self, mock_data_service) -> None:
        mock_data_service.query.return_value = ExternalResponse.ok(
            [{"id": "p1", "first_name": "Ada", "last_name": "Lovelace", "date_of_birth": "1950-12-10"}]
        )

        result = await ListPatientsUseCase(mock_data_service).execute()

        assert result.success is True
        assert result.patients[0].full_name == "Ada Lovelace"
        assert result.patients[0].date_of_birth == date(1950, 12, 10)
        mock_data_service.query.assert_awaited_once_with(Collection.PATIENTS)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("term", [None, "", "   "])
    async def test_blank_search_lists_all(self, mock_data_service, term) -> None:
        await SearchPatientsUseCase(mock_data_service).execute(term)

        mock_data_service.query.assert_awaited_once_with(Collection.PATIENTS)

    @pytest.mark.asyncio
    async def test_search_matches_first_or_last_name(self, mock_data_service) -> None:
        await SearchPatientsUseCase(mock_data_service).execute("  love ")

        _, kwargs = mock_data_service.query.call_args
        (search,) = kwargs["filters"]
        assert search.operator == FilterOperator.OR
        assert search.any_of == (QueryFilter.ilike("first_name", "love"), QueryFilter.ilike("last_name", "love"))

    @pytest.mark.asyncio
    async def test_add_patient(self, mock_data_service) -> None:
        result = await AddPatientUseCase(mock_data_service).execute(
            AddPatientRequest(first_name=" Ada ", last_name="Lovelace", date_of_birth=date(1950, 12, 10))
        )

        assert result.success is True
        assert result.data.first_name == "Ada"
        mock_data_service.insert.assert_awaited_once_with(
            Collection.PATIENTS,
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "date_of_birth": "1950-12-10",
                "address": None,
                "phone_number": None,
            },
        )

    @pytest.mark.asyncio
    async def test_add_patient_without_birth_date_makes_no_call(self, mock_data_service) -> None:
        result = await AddPatientUseCase(mock_data_service).execute(
            AddPatientRequest(first_name="Ada", last_name="Lovelace", date_of_birth=None)
        )

        assert result.error_code == ErrorKind.VALIDATION
        assert result.error_message == "Please enter first name, last name, and date of birth."
        mock_data_service.insert.assert_not_called()


# ============================================================================
# Details, history, profile
# ============================================================================


class TestReads:
    """Tests for the single-record and history reads."""

    @pytest.mark.asyncio
    async def test_appointment_details(self, mock_data_service, make_appointment_row) -> None:
        mock_data_service.query.return_value = ExternalResponse.ok([make_appointment_row("appt-1")])

        result = await GetAppointmentDetailsUseCase(mock_data_service).execute("appt-1", NURSE_ID)

        assert result.success is True
        assert result.appointment.patient_name == "Ada Lovelace"
        assert mock_data_service.query.call_args.kwargs["limit"] == 1

    @pytest.mark.asyncio
    async def test_appointment_details_not_found(self, mock_data_service) -> None:
        result = await GetAppointmentDetailsUseCase(mock_data_service).execute("missing", NURSE_ID)

        assert result.success is False
        assert result.error_message == "Couldn't find appointment."

    @pytest.mark.asyncio
    async def test_visit_history(self, mock_data_service, make_appointment_row) -> None:
        row = make_appointment_row("appt-1", status="Completed")
        row["patient_records"] = [{"id": "rec-1", "notes": "ok", "vitals": {}}]
        mock_data_service.query.return_value = ExternalResponse.ok([row, make_appointment_row("appt-2")])

        result = await GetVisitHistoryUseCase(mock_data_service).execute("patient-1")

        assert [v.id for v in result.visits] == ["appt-1", "appt-2"]
        assert result.visits[0].records[0].notes == "ok"
        _, kwargs = mock_data_service.query.call_args
        assert kwargs["filters"] == [QueryFilter.eq("patient_id", "patient-1")]

    @pytest.mark.asyncio
    async def test_nurse_profile(self, mock_data_service) -> None:
        mock_data_service.query.return_value = ExternalResponse.ok([{"id": NURSE_ID, "first_name": "Jane"}])

        result = await GetNurseProfileUseCase(mock_data_service).execute(NURSE_ID)

        assert result.data.first_name == "Jane"

    @pytest.mark.asyncio
    async def test_missing_nurse_profile(self, mock_data_service) -> None:
        result = await GetNurseProfileUseCase(mock_data_service).execute(NURSE_ID)

        assert result.success is True
        assert result.data is None
