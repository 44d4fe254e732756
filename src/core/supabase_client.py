"""
Supabase client setup with lazy initialization.
"""

from supabase import Client, create_client

from core.config import SUPABASE_SERVICE_ROLE_KEY, SUPABASE_URL

_supabase_client: Client | None = None


class SupabaseNotConfiguredError(RuntimeError):
    """Raised when Supabase is used without URL or service role key."""


def get_supabase_client() -> Client:
    """Get or create the Supabase client (lazy initialization)."""
    global _supabase_client
    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY:
            raise SupabaseNotConfiguredError(
                "Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY."
            )
        _supabase_client = create_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)
    return _supabase_client
