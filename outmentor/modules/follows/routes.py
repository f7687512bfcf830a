from fastapi import APIRouter, Depends
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.follows.schemas import FollowToggleResponse, FollowStatusResponse, FollowersResponse
from outmentor.modules.follows.service import FollowService
from outmentor.core.dependencies import get_current_session
from outmentor.core.session import ActorSession
from supabase import Client

router = APIRouter(prefix="/follows", tags=["follows"])


def get_follow_service(supabase: Client = Depends(get_supabase)) -> FollowService:
    return FollowService(supabase)


@router.post("/{target_id}/toggle", response_model=FollowToggleResponse)
async def toggle_follow(
    target_id: str,
    session: ActorSession = Depends(get_current_session),
    service: FollowService = Depends(get_follow_service)
):
    """Follow or unfollow a profile as the current member"""
    state = service.toggle_follow(session.actor_id, target_id)
    return FollowToggleResponse(
        target_id=target_id,
        state=state,
        follower_count=service.get_follower_count(target_id)
    )


@router.get("/{target_id}/status", response_model=FollowStatusResponse)
async def follow_status(
    target_id: str,
    session: ActorSession = Depends(get_current_session),
    service: FollowService = Depends(get_follow_service)
):
    following = False if session.is_self(target_id) else service.is_following(session.actor_id, target_id)
    return FollowStatusResponse(
        target_id=target_id,
        following=following,
        follower_count=service.get_follower_count(target_id)
    )


@router.get("/{target_id}/followers", response_model=FollowersResponse)
async def list_followers(
    target_id: str,
    session: ActorSession = Depends(get_current_session),
    service: FollowService = Depends(get_follow_service)
):
    followers = service.list_followers(target_id)
    return FollowersResponse(
        target_id=target_id,
        count=service.get_follower_count(target_id),
        followers=followers
    )
