# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Ports (interfaces) for the hosted data service.
# ============================================================================
"""Nursing Visits Application Ports.

Interfaces the use cases depend on, following the hexagonal architecture:
- IDataService: table queries, counts, inserts and updates
- IAuthService: sign-in, sign-out, current session, session-change events
"""

from .auth_port import AuthEvent, AuthSubscription, IAuthService, SessionChangeCallback
from .data_service import IDataService
from .query import Collection, FilterOperator, OrderBy, QueryFilter
from .response import ExternalResponse

__all__ = [
    # Response type
    "ExternalResponse",
    # Query language
    "Collection",
    "FilterOperator",
    "OrderBy",
    "QueryFilter",
    # Interfaces
    "IDataService",
    "IAuthService",
    "AuthEvent",
    "AuthSubscription",
    "SessionChangeCallback",
]
