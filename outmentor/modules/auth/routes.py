from fastapi import APIRouter, Depends
from outmentor.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
)
from outmentor.modules.auth.service import AuthService
from outmentor.core.dependencies import get_auth_service, get_current_token, get_current_session
from outmentor.core.session import ActorSession

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new mentor or team"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=ActorSession, response_model_exclude={"access_token"})
async def get_current_user(
    session: ActorSession = Depends(get_current_session),
):
    """Current actor id, role and administrator flag (for frontend UI)."""
    return session
