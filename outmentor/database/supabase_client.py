from typing import Optional
from postgrest.exceptions import APIError
from supabase import create_client, Client
from outmentor.config import settings


class SupabaseClient:
    """Process-wide Supabase clients for the profiles/connections/followers/reports store."""
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Needed to create auth users when seeding admins."""
        if cls._service_client is None:
            if not settings.supabase_service_role_key:
                raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not configured")
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def fetch_one(query) -> Optional[dict]:
    """
    Run ``query.maybe_single()`` and return the row, or None when nothing matched.

    Depending on the postgrest release, zero rows come back either as a None
    response or as an APIError with code 204; both mean "no row".
    """
    try:
        result = query.maybe_single().execute()
    except APIError as e:
        if str(e.code) == "204":
            return None
        raise
    return result.data if result and result.data else None
