from fastapi import APIRouter, Depends, HTTPException, status
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, ProfileFlagUpdate, ProfileDeleteResponse
)
from outmentor.modules.profiles.service import ProfileService
from outmentor.modules.auth.service import AuthService
from outmentor.core.dependencies import get_current_session, require_admin, get_auth_service
from outmentor.core.session import ActorSession
from supabase import Client
from typing import List

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(
    limit: int = 100,
    offset: int = 0,
    session: ActorSession = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """List every profile, newest first (admin only)"""
    return service.list_profiles(limit=limit, offset=offset)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    session: ActorSession = Depends(get_current_session),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_profile(session.actor_id)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    session: ActorSession = Depends(get_current_session),
    service: ProfileService = Depends(get_profile_service)
):
    """Update own profile and role-specific details"""
    return service.update_profile(session, session.actor_id, profile_data)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    session: ActorSession = Depends(get_current_session),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_profile(profile_id)


@router.patch("/{profile_id}/admin", response_model=ProfileResponse)
async def set_admin(
    profile_id: str,
    flag: ProfileFlagUpdate,
    session: ActorSession = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """Grant or revoke the administrator flag (admin only)"""
    return service.set_admin(profile_id, flag.value)


@router.patch("/{profile_id}/verification", response_model=ProfileResponse)
async def set_mentor_verified(
    profile_id: str,
    flag: ProfileFlagUpdate,
    session: ActorSession = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """Mark a mentor as verified or unverified (admin only)"""
    return service.set_mentor_verified(profile_id, flag.value)


@router.post("/{profile_id}/avatar-sync", response_model=ProfileResponse)
async def sync_avatar(
    profile_id: str,
    session: ActorSession = Depends(get_current_session),
    service: ProfileService = Depends(get_profile_service)
):
    """Refresh the Gravatar URL (own profile or admin)"""
    if not session.is_self(profile_id) and not session.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Profile not accessible")
    return service.sync_avatar(profile_id)


@router.delete("/{profile_id}", response_model=ProfileDeleteResponse)
async def delete_profile(
    profile_id: str,
    session: ActorSession = Depends(get_current_session),
    service: ProfileService = Depends(get_profile_service),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Delete a profile (own or admin). Deleting your own profile signs you out."""
    own_profile = service.delete_profile(session, profile_id)
    signed_out = False
    if own_profile and session.access_token:
        signed_out = auth_service.logout(session.access_token)
    return ProfileDeleteResponse(deleted=True, signed_out=signed_out)
