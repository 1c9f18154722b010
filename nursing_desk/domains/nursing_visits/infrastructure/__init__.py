# Infrastructure Layer - Nursing Visits
# Contains the adapters behind the application ports

from .external.supabase import SupabaseAuthClient, SupabaseRESTClient, create_supabase_clients

__all__ = [
    "SupabaseAuthClient",
    "SupabaseRESTClient",
    "create_supabase_clients",
]
