"""
Seed Administrator Script
Creates (or re-flags) the first administrator account so the moderation
panel can be reached on a fresh project. Requires the service role key.

Usage: python -m outmentor.scripts.seed_admin
"""

import sys
import logging

from supabase import Client

from outmentor.config import settings
from outmentor.database.supabase_client import get_service_supabase
from outmentor.modules.profiles.avatar import gravatar_url

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_auth_user(supabase: Client, email: str, password: str) -> str:
    """Create a confirmed auth user and return its id"""
    response = supabase.auth.admin.create_user({
        "email": email,
        "password": password,
        "email_confirm": True
    })
    if not response.user or not response.user.id:
        raise RuntimeError("Auth user created without an id")
    return response.user.id


def upsert_admin_profile(supabase: Client, user_id: str, email: str) -> None:
    # Staff profile: no mentor/team role, so it never shows up in searches or statistics
    supabase.table("profiles").upsert({
        "id": user_id,
        "email": email,
        "full_name": "Admin",
        "is_admin": True,
        "gravatar_url": gravatar_url(email)
    }, on_conflict="id").execute()


def seed_admin(supabase: Client, email: str, password: str) -> str:
    logger.info(f"Seeding administrator {email}...")
    user_id = create_auth_user(supabase, email, password)
    upsert_admin_profile(supabase, user_id, email)
    logger.info(f"Admin seeded: {email} id: {user_id}")
    return user_id


def main() -> int:
    try:
        supabase = get_service_supabase()
    except RuntimeError as e:
        logger.error(f"Missing configuration: {e}")
        return 1
    try:
        seed_admin(supabase, settings.seed_admin_email, settings.seed_admin_password)
        return 0
    except Exception as e:
        logger.error(f"Error seeding admin: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
