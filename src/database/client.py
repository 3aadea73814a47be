"""
Farkle - Supabase Client

Factory for the Supabase client. `get_supabase_client` caches one client per
process, built from the application settings.
"""

from functools import lru_cache

from supabase import Client, create_client

from src.config.settings import Settings, get_settings


def create_supabase_client(settings: Settings) -> Client:
    """Build a client from explicit settings (tests, scripts)."""
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must both be set.")
    return create_client(settings.supabase_url, settings.supabase_anon_key)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create and cache a Supabase client instance."""
    return create_supabase_client(get_settings())
