from supabase import Client
from outmentor.core.errors import InvalidOperation, NotFound, StoreFailure
from outmentor.modules.follows.schemas import FollowState
from outmentor.modules.profiles.schemas import ProfileSummary
from outmentor.modules.profiles.service import ProfileService
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class FollowService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def toggle_follow(self, follower_id: str, target_id: str) -> FollowState:
        """
        Flip the follower -> target edge and return the new state.

        Uses a conditional delete and then, only if nothing was deleted, an
        insert that ignores an existing pair. Concurrent toggles from the same
        member can never create a duplicate edge or fail on one.
        """
        if follower_id == target_id:
            raise InvalidOperation()
        if not ProfileService(self.supabase).find_profile_row(target_id, "id"):
            raise NotFound("Profile not found")

        try:
            deleted = self.supabase.table("followers")\
                .delete()\
                .eq("follower_id", follower_id)\
                .eq("following_id", target_id)\
                .execute()

            if deleted.data:
                logger.info(f"{follower_id} unfollowed {target_id}")
                return FollowState.NOT_FOLLOWING

            self.supabase.table("followers").upsert(
                {"follower_id": follower_id, "following_id": target_id},
                on_conflict="follower_id,following_id",
                ignore_duplicates=True
            ).execute()

            logger.info(f"{follower_id} followed {target_id}")
            return FollowState.FOLLOWING
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error toggling follow {follower_id} -> {target_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def is_following(self, follower_id: str, target_id: str) -> bool:
        try:
            result = self.supabase.table("followers")\
                .select("id")\
                .eq("follower_id", follower_id)\
                .eq("following_id", target_id)\
                .limit(1)\
                .execute()
            return bool(result.data)
        except Exception as e:
            logger.error(f"Error checking follow {follower_id} -> {target_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def get_follower_count(self, target_id: str) -> int:
        try:
            result = self.supabase.table("followers")\
                .select("id", count="exact")\
                .eq("following_id", target_id)\
                .execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"Error counting followers of {target_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def list_followers(self, target_id: str) -> List[ProfileSummary]:
        try:
            result = self.supabase.table("followers")\
                .select("follower_id, follower:follower_id(id, full_name, avatar_url, role)")\
                .eq("following_id", target_id)\
                .execute()
            return [
                ProfileSummary(**row["follower"])
                for row in result.data or []
                if row.get("follower")
            ]
        except Exception as e:
            logger.error(f"Error listing followers of {target_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e
