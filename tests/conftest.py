"""
Shared pytest fixtures for all tests.

This module provides mock ports, sample rows and a fixed clock shared by
the nursing visits tests.
"""

import os
from datetime import date, datetime, time
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from nursing_desk.domains.nursing_visits.application.ports import ExternalResponse
from nursing_desk.domains.nursing_visits.domain.entities import NurseSession, Patient

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")


NURSE_ID = "nurse-1"
TODAY = date(2025, 3, 10)
NOW = datetime(2025, 3, 10, 9, 0)


# ============================================================================
# CLOCK FIXTURES
# ============================================================================


@pytest.fixture
def now() -> datetime:
    """Fixed local wall-clock time: 2025-03-10 09:00."""
    return NOW


@pytest.fixture
def clock(now: datetime):
    """Clock callable returning the fixed time."""
    return lambda: now


# ============================================================================
# PORT FIXTURES
# ============================================================================


@pytest.fixture
def mock_data_service() -> AsyncMock:
    """Mock IDataService; every call succeeds with no rows by default."""
    service = AsyncMock()
    service.query.return_value = ExternalResponse.ok([])
    service.count.return_value = ExternalResponse.ok({"count": 0})
    service.insert.return_value = ExternalResponse.ok()
    service.update.return_value = ExternalResponse.ok([{"id": "appt-1", "status": "Completed"}])
    return service


@pytest.fixture
def mock_auth_service() -> AsyncMock:
    """Mock IAuthService with a synchronous subscription method."""
    service = AsyncMock()
    service.sign_out.return_value = ExternalResponse.ok()
    service.get_current_session.return_value = None
    service.on_session_change = MagicMock(return_value=MagicMock())
    return service


# ============================================================================
# SAMPLE DATA FIXTURES
# ============================================================================


@pytest.fixture
def token_payload() -> dict[str, Any]:
    """Token response of a password sign-in."""
    return {
        "access_token": "token-abc",
        "token_type": "bearer",
        "expires_in": 3600,
        "expires_at": 1741600800,
        "refresh_token": "refresh-abc",
        "user": {"id": NURSE_ID, "email": "jane.doe@clinic.test"},
    }


@pytest.fixture
def nurse_session() -> NurseSession:
    return NurseSession(access_token="token-abc", user_id=NURSE_ID, email="jane.doe@clinic.test")


@pytest.fixture
def sample_patient() -> Patient:
    return Patient(
        id="patient-1",
        first_name="Ada",
        last_name="Lovelace",
        date_of_birth=date(1950, 12, 10),
        address="12 St James's Square",
        phone_number="555-0100",
    )


def appointment_row(
    appointment_id: str,
    appointment_date: date = TODAY,
    appointment_time: time = time(10, 0),
    status: str = "Scheduled",
    patient_id: str = "patient-1",
    first_name: str = "Ada",
    last_name: str = "Lovelace",
) -> dict[str, Any]:
    """Appointment row as returned with an embedded patient."""
    return {
        "id": appointment_id,
        "patient_id": patient_id,
        "nurse_id": NURSE_ID,
        "appointment_date": appointment_date.isoformat(),
        "appointment_time": appointment_time.strftime("%H:%M:%S"),
        "status": status,
        "patients": {"first_name": first_name, "last_name": last_name},
    }


@pytest.fixture
def make_appointment_row():
    """Factory fixture for appointment rows."""
    return appointment_row
