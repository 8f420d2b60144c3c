"""
Hearthstone - Supabase Client.

Low-level remote access. The remote profile store, sync queue and
partner linking all go through get_client().
"""

from supabase import Client, create_client

from hearthstone.config import settings
from hearthstone.errors import SyncError

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.

    Raises:
        SyncError: If Supabase is not configured
    """
    global _client

    if _client is None:
        if not settings.sync_enabled:
            raise SyncError("Supabase is not configured (SUPABASE_URL / SUPABASE_ANON_KEY)")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def reset_client() -> None:
    """Drop the cached client (tests, settings changes)."""
    global _client
    _client = None
