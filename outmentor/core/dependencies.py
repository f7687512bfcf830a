"""
Core dependencies for route protection and session construction
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.auth.service import AuthService
from outmentor.modules.profiles.service import ProfileService
from outmentor.core.session import ActorSession
from supabase import Client
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_current_session(
    token: str = Depends(get_current_token),
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> ActorSession:
    """Build the explicit session for this request from the token user and their profile row"""
    row = ProfileService(supabase).find_profile_row(user_data["id"], "id, role, is_admin, email")
    if not row:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No profile exists for this account"
        )
    return ActorSession(
        actor_id=row["id"],
        role=row.get("role"),
        is_admin=bool(row.get("is_admin")),
        email=row.get("email") or user_data.get("email"),
        access_token=token,
    )


def require_member(session: ActorSession = Depends(get_current_session)) -> ActorSession:
    """Only mentor or team profiles may search the directory and create connections"""
    if session.role is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This action requires a mentor or team profile"
        )
    return session


def require_admin(session: ActorSession = Depends(get_current_session)) -> ActorSession:
    """Dependency to check the administrator capability"""
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required"
        )
    return session
