# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Use cases for signing a nurse in and out.
# ============================================================================
"""Authentication Use Cases."""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import NurseSession
from ..dto.visit_dtos import ErrorKind, LoginRequest, LoginResult, UseCaseResult
from ..utils import ResponseExtractor

if TYPE_CHECKING:
    from ..ports import IAuthService

logger = logging.getLogger(__name__)


class AuthenticateUseCase:
    """Sign a nurse in with e-mail and password. No retry on failure."""

    def __init__(self, auth: "IAuthService") -> None:
        self._auth = auth

    async def execute(self, request: LoginRequest) -> LoginResult:
        email = (request.email or "").strip()
        if not email or not request.password:
            return LoginResult(
                success=False,
                error_code=ErrorKind.VALIDATION,
                error_message="Please enter your e-mail and password.",
            )

        logger.info(f"Signing in {email}")
        response = await self._auth.sign_in(email, request.password)

        if not response.success:
            logger.warning(f"Sign-in failed for {email}: {response.error_code} - {response.error_message}")
            return LoginResult(
                success=False,
                error_code=ErrorKind.AUTH,
                error_message=ResponseExtractor.error_message(response, "Invalid login credentials"),
            )

        session = NurseSession.from_external_data(ResponseExtractor.as_dict(response.data))
        if not session.user_id or not session.access_token:
            return LoginResult(
                success=False,
                error_code=ErrorKind.AUTH,
                error_message="The auth service returned no session.",
            )

        logger.info(f"Nurse {session.user_id} signed in")
        return LoginResult(success=True, session=session)


class SignOutUseCase:
    """Sign the current nurse out.

    The caller clears its session whatever this returns; a remote failure
    is only reported.
    """

    def __init__(self, auth: "IAuthService") -> None:
        self._auth = auth

    async def execute(self) -> UseCaseResult:
        response = await self._auth.sign_out()
        if not response.success:
            logger.warning(f"Sign-out failed remotely: {response.error_code} - {response.error_message}")
            return UseCaseResult.error(
                ErrorKind.REMOTE,
                ResponseExtractor.error_message(response, "Sign-out failed"),
            )
        return UseCaseResult.ok()
