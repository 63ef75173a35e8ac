"""
Shared Supabase connection for the users and orders repositories.

One service-role client serves every request. Row Level Security is not
relied on: OrderService and AuthService check ownership themselves.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Built on first use, dropped by reset_client_cache()
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the process-wide client the repositories query through.

    Raises:
        RuntimeError: AUTOSTYLE_SUPABASE_URL or the service-role key is unset.
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set AUTOSTYLE_SUPABASE_URL and AUTOSTYLE_SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """Forget the cached client so the next call builds a fresh one."""
    global _service_client
    _service_client = None
