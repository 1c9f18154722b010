# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Nursing Visits)
# Description: Supabase (GoTrue) auth client implementation.
# ============================================================================
"""Supabase Auth Client.

Async client for the hosted auth subsystem. Holds the current session in
memory and notifies subscribers when it starts, ends, or expires.
"""

import logging
from datetime import UTC, datetime
from typing import Callable

import httpx

from ....application.ports import AuthEvent, ExternalResponse, SessionChangeCallback
from ....domain.entities import NurseSession
from .response_parser import SupabaseResponseParser

logger = logging.getLogger(__name__)


class _Subscription:
    """Handle that removes its callback from the listener list."""

    def __init__(self, listeners: list[SessionChangeCallback], callback: SessionChangeCallback) -> None:
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class SupabaseAuthClient:
    """Implements IAuthService against ``<project>/auth/v1``."""

    def __init__(
        self,
        auth_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        response_parser: SupabaseResponseParser | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        """Initialize auth client.

        Args:
            auth_url: GoTrue endpoint, e.g. ``https://xyz.supabase.co/auth/v1``.
            api_key: Project anon key.
            timeout: Request timeout in seconds.
            transport: Optional custom httpx transport.
            response_parser: Optional custom response parser.
            clock: Returns the current UTC time, used for expiry checks.
        """
        self.auth_url = auth_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

        self._transport = transport
        self._parser = response_parser or SupabaseResponseParser()
        self._clock = clock
        self._session: NurseSession | None = None
        self._listeners: list[SessionChangeCallback] = []
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"apikey": self.api_key, "Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @property
    def access_token(self) -> str | None:
        """Token of the held session, used by the REST client."""
        return self._session.access_token if self._session else None

    # =========================================================================
    # IAuthService implementation
    # =========================================================================

    async def sign_in(self, email: str, password: str) -> ExternalResponse:
        client = await self._get_client()
        try:
            response = await client.post(
                f"{self.auth_url}/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
            )
        except httpx.TimeoutException:
            logger.error("Timeout signing in")
            return ExternalResponse.error("TIMEOUT", "The sign-in request timed out")
        except httpx.RequestError as e:
            logger.error(f"Request error signing in: {e}")
            return ExternalResponse.error("CONNECTION_ERROR", "Could not reach the sign-in service")

        if not response.is_success:
            message = self._parser.error_message(response)
            if response.status_code in (400, 401, 403, 422):
                return ExternalResponse.error("AUTH_ERROR", message)
            return self._parser.parse_error(response)

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            logger.error("Sign-in response was not a JSON object")
            return ExternalResponse.error("INVALID_RESPONSE", "The sign-in service returned an unreadable response")

        self._session = NurseSession.from_external_data(payload)
        await self._emit(AuthEvent.SIGNED_IN, self._session)
        return ExternalResponse.ok(payload)

    async def sign_out(self) -> ExternalResponse:
        """Revoke the session remotely; the local session is dropped either way."""
        session = self._session
        if session is None:
            return ExternalResponse.ok()

        result = ExternalResponse.ok()
        client = await self._get_client()
        try:
            response = await client.post(
                f"{self.auth_url}/logout",
                headers={"Authorization": f"Bearer {session.access_token}"},
            )
            if not response.is_success:
                result = self._parser.parse_error(response)
        except httpx.TimeoutException:
            logger.error("Timeout signing out")
            result = ExternalResponse.error("TIMEOUT", "The sign-out request timed out")
        except httpx.RequestError as e:
            logger.error(f"Request error signing out: {e}")
            result = ExternalResponse.error("CONNECTION_ERROR", "Could not reach the sign-out service")

        self._session = None
        await self._emit(AuthEvent.SIGNED_OUT, None)
        return result

    async def get_current_session(self) -> NurseSession | None:
        if self._session is not None and self._session.is_expired(self._clock()):
            await self.expire_session()
        return self._session

    def on_session_change(self, callback: SessionChangeCallback) -> _Subscription:
        self._listeners.append(callback)
        return _Subscription(self._listeners, callback)

    # =========================================================================
    # Expiry
    # =========================================================================

    async def expire_session(self) -> None:
        """Drop the session because the service no longer accepts it."""
        if self._session is None:
            return
        logger.info(f"Session of {self._session.user_id} expired")
        self._session = None
        await self._emit(AuthEvent.SESSION_EXPIRED, None)

    async def _emit(self, event: AuthEvent, session: NurseSession | None) -> None:
        for callback in list(self._listeners):
            try:
                await callback(event, session)
            except Exception:
                logger.exception(f"Session listener failed on {event.value}")
