"""
Application entry point.

Wires settings, logging, error tracking and the Supabase adapters into a
ClinicController. The UI layer drives the controller and renders its state.
"""

import logging
from dataclasses import dataclass

import sentry_sdk

from nursing_desk.config.settings import Settings, get_settings
from nursing_desk.core.shared import configure_logging
from nursing_desk.domains.nursing_visits.application.services import ClinicController
from nursing_desk.domains.nursing_visits.infrastructure import (
    SupabaseAuthClient,
    SupabaseRESTClient,
    create_supabase_clients,
)

logger = logging.getLogger(__name__)


@dataclass
class NursingDesk:
    """Controller plus the clients it owns."""

    controller: ClinicController
    data_service: SupabaseRESTClient
    auth_service: SupabaseAuthClient

    async def aclose(self) -> None:
        self.controller.close()
        await self.data_service.close()
        await self.auth_service.close()


def bootstrap(settings: Settings | None = None) -> NursingDesk:
    """Configure logging and Sentry, then build the controller."""
    settings = settings or get_settings()

    configure_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)

    # Initialize Sentry for error tracking
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            send_default_pii=False,
            environment=settings.ENVIRONMENT,
        )

    data_service, auth_service = create_supabase_clients(settings)
    controller = ClinicController(
        data_service=data_service,
        auth_service=auth_service,
        page_size=settings.appointment_page_limit,
        notification_timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
    )

    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENVIRONMENT} mode")
    return NursingDesk(controller=controller, data_service=data_service, auth_service=auth_service)
