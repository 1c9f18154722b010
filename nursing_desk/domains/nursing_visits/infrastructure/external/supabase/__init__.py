# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Nursing Visits)
# Description: Supabase client module.
# ============================================================================
"""Supabase Client Module.

Provides async clients for the hosted data service.

Components:
- SupabaseRESTClient: Table access implementing IDataService
- SupabaseAuthClient: Sessions implementing IAuthService
- PostgRESTQueryBuilder: Builds PostgREST query params
- SupabaseResponseParser: Parses HTTP responses

Usage:
    from nursing_desk.domains.nursing_visits.infrastructure.external.supabase import (
        create_supabase_clients,
    )

    data_service, auth_service = create_supabase_clients(get_settings())
"""

from typing import TYPE_CHECKING

from .auth_client import SupabaseAuthClient
from .client import SupabaseRESTClient
from .query_builder import PostgRESTQueryBuilder
from .response_parser import SupabaseResponseParser

if TYPE_CHECKING:
    from nursing_desk.config.settings import Settings


def create_supabase_clients(settings: "Settings") -> tuple[SupabaseRESTClient, SupabaseAuthClient]:
    """Build the REST and auth clients sharing one session."""
    auth = SupabaseAuthClient(
        auth_url=settings.auth_url,
        api_key=settings.SUPABASE_ANON_KEY,
        timeout=settings.SUPABASE_TIMEOUT,
    )
    rest = SupabaseRESTClient(
        rest_url=settings.rest_url,
        api_key=settings.SUPABASE_ANON_KEY,
        auth=auth,
        timeout=settings.SUPABASE_TIMEOUT,
    )
    return rest, auth


__all__ = [
    "PostgRESTQueryBuilder",
    "SupabaseAuthClient",
    "SupabaseRESTClient",
    "SupabaseResponseParser",
    "create_supabase_clients",
]
