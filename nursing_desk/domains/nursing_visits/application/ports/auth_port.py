# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Authentication port.
# ============================================================================
"""Authentication Port.

Defines sign-in/out, the current session, and session-change
subscriptions of the hosted auth subsystem.
"""

from enum import Enum
from typing import TYPE_CHECKING, Awaitable, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities import NurseSession
    from .response import ExternalResponse


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    SESSION_EXPIRED = "SESSION_EXPIRED"


SessionChangeCallback = Callable[[AuthEvent, "NurseSession | None"], Awaitable[None]]


@runtime_checkable
class AuthSubscription(Protocol):
    """Handle returned by ``on_session_change``."""

    def unsubscribe(self) -> None: ...


@runtime_checkable
class IAuthService(Protocol):
    """Interface for the auth subsystem.

    Implementations: SupabaseAuthClient
    """

    async def sign_in(self, email: str, password: str) -> "ExternalResponse":
        """Sign in with e-mail and password.

        Returns:
            ExternalResponse whose data is the token payload, or AUTH_ERROR.
        """
        ...

    async def sign_out(self) -> "ExternalResponse":
        """Sign out the current session."""
        ...

    async def get_current_session(self) -> "NurseSession | None":
        """Return the live session, or None when signed out or expired."""
        ...

    def on_session_change(self, callback: SessionChangeCallback) -> AuthSubscription:
        """Register a callback for session changes."""
        ...
