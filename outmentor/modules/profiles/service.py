from supabase import Client
from outmentor.database.supabase_client import fetch_one
from outmentor.core.errors import NotFound, RoleMismatch, StoreFailure
from outmentor.core.session import ActorSession
from outmentor.modules.profiles.avatar import gravatar_url
from outmentor.modules.profiles.schemas import ProfileUpdate, ProfileResponse, ProfileRole
from typing import List, Optional
from fastapi import HTTPException, status
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

PROFILE_WITH_DETAILS = "*, mentor_details(*), team_details(*)"


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, profile_id: str) -> ProfileResponse:
        """Get profile by ID, including mentor/team details"""
        try:
            row = fetch_one(
                self.supabase.table("profiles")
                .select(PROFILE_WITH_DETAILS)
                .eq("id", profile_id)
            )
            if not row:
                raise NotFound("Profile not found")

            return ProfileResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading profile {profile_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def find_profile_row(self, profile_id: str, columns: str = "*") -> Optional[dict]:
        """Raw profile row or None; used when building sessions and checking roles"""
        try:
            return fetch_one(self.supabase.table("profiles").select(columns).eq("id", profile_id))
        except Exception as e:
            logger.error(f"Error loading profile row {profile_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def update_profile(self, session: ActorSession, profile_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update own profile. Role is never writable; details follow the profile's role."""
        if not session.is_self(profile_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only edit your own profile")
        if profile_data.mentor_details is not None and session.role != ProfileRole.MENTOR:
            raise RoleMismatch("Mentor details can only be set on mentor profiles")
        if profile_data.team_details is not None and session.role != ProfileRole.TEAM:
            raise RoleMismatch("Team details can only be set on team profiles")

        try:
            update_data = profile_data.model_dump(
                exclude_unset=True, exclude={"mentor_details", "team_details"}
            )
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", profile_id)\
                .execute()

            if not result.data:
                raise NotFound("Profile not found")

            if profile_data.mentor_details is not None:
                self.supabase.table("mentor_details")\
                    .update(profile_data.mentor_details.model_dump())\
                    .eq("profile_id", profile_id)\
                    .execute()
            if profile_data.team_details is not None:
                self.supabase.table("team_details")\
                    .update(profile_data.team_details.model_dump(mode="json"))\
                    .eq("profile_id", profile_id)\
                    .execute()

            logger.info(f"Profile {profile_id} updated")
            return self.get_profile(profile_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating profile {profile_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def list_profiles(self, limit: int = 100, offset: int = 0) -> List[ProfileResponse]:
        """List all profiles, newest first (admin panel)"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [ProfileResponse(**profile) for profile in result.data]
        except Exception as e:
            logger.error(f"Error listing profiles: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def _set_flag(self, profile_id: str, flag: str, value: bool) -> ProfileResponse:
        try:
            result = self.supabase.table("profiles")\
                .update({flag: value})\
                .eq("id", profile_id)\
                .execute()

            if not result.data:
                raise NotFound("Profile not found")

            logger.info(f"Profile {profile_id}: {flag} set to {value}")
            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error setting {flag} on profile {profile_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def set_admin(self, profile_id: str, is_admin: bool) -> ProfileResponse:
        return self._set_flag(profile_id, "is_admin", is_admin)

    def set_mentor_verified(self, profile_id: str, verified: bool) -> ProfileResponse:
        return self._set_flag(profile_id, "is_mentor_verified", verified)

    def delete_profile(self, session: ActorSession, profile_id: str) -> bool:
        """
        Delete a profile row (self or admin). Connections, follows and reports
        go with it through ON DELETE CASCADE; the auth user is left in place.

        Returns True when members deleted their own profile, in which case the
        caller must end the session.
        """
        if not session.is_self(profile_id) and not session.is_admin:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Profile not accessible")
        try:
            result = self.supabase.table("profiles")\
                .delete()\
                .eq("id", profile_id)\
                .execute()

            if not result.data:
                raise NotFound("Profile not found")

            logger.info(f"Profile {profile_id} deleted by {session.actor_id}")
            return session.is_self(profile_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting profile {profile_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def sync_avatar(self, profile_id: str) -> ProfileResponse:
        """Recompute the Gravatar URL from the profile e-mail"""
        row = self.find_profile_row(profile_id, "id, email")
        if not row:
            raise NotFound("Profile not found")
        try:
            result = self.supabase.table("profiles")\
                .update({
                    "gravatar_url": gravatar_url(row.get("email")),
                    "last_avatar_checked": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", profile_id)\
                .execute()

            if not result.data:
                raise NotFound("Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error syncing avatar for profile {profile_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e
