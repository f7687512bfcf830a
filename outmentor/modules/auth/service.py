import hashlib
import time
import logging
from supabase import Client
from outmentor.database.supabase_client import get_service_supabase
from outmentor.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from outmentor.modules.profiles.avatar import gravatar_url
from outmentor.modules.profiles.schemas import ProfileRole
from fastapi import HTTPException, status
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Token -> auth user, so the many requests a page fires with one token hit Supabase Auth once
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cached_user(token: str) -> Optional[Dict[str, Any]]:
    entry = _AUTH_USER_CACHE.get(_token_key(token))
    if entry is None:
        return None
    user_data, expiry = entry
    if time.monotonic() >= expiry:
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        return None
    return user_data


def _remember_user(token: str, user_data: Dict[str, Any]) -> None:
    if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
        _AUTH_USER_CACHE[_token_key(token)] = (user_data, time.monotonic() + _AUTH_CACHE_TTL_SEC)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new member with Supabase Auth and create the profile row"""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {"full_name": register_data.full_name} if register_data.full_name else {}
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            user_id = auth_response.user.id
            self.supabase.table("profiles").insert({
                "id": user_id,
                "email": register_data.email,
                "role": register_data.role.value,
                "full_name": register_data.full_name,
                "region": register_data.region,
                "city": register_data.city,
                "gravatar_url": gravatar_url(register_data.email),
            }).execute()

            # Details rows exist from the start so profile edits are plain updates
            details_table = "mentor_details" if register_data.role == ProfileRole.MENTOR else "team_details"
            self.supabase.table(details_table).insert({"profile_id": user_id}).execute()

            logger.info(f"Registered {register_data.role.value} profile {user_id}")
            return RegisterResponse(
                user_id=user_id,
                email=auth_response.user.email or register_data.email,
                role=register_data.role,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Registration failed: {error_message}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Exchange e-mail and password for a Supabase access token"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            message = str(e).lower()
            if "invalid" in message or "credentials" in message:
                raise _unauthorized("Invalid email or password")
            logger.error(f"Login failed for {login_data.email}: {e}")
            raise HTTPException(status_code=500, detail=f"Login failed: {e}")

        user, session = auth_response.user, auth_response.session
        if not user or not session:
            raise _unauthorized("Invalid credentials")
        return TokenResponse(
            access_token=session.access_token,
            user_id=user.id,
            email=user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Auth user behind a bearer token, served from a short-lived cache when possible"""
        cached = _cached_user(token)
        if cached is not None:
            return cached

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.warning(f"Token verification failed: {e}")
            raise _unauthorized("Invalid or expired token")

        user = user_response.user if user_response else None
        if not user:
            raise _unauthorized("Invalid or expired token")

        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
        }
        _remember_user(token, user_data)
        return user_data

    def logout(self, token: str) -> bool:
        """
        Revoke the sessions behind this token and drop it from the cache.

        The shared anon client holds no member session, so revocation goes
        through the service-role admin API. Returns False when it could not be done.
        """
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        try:
            get_service_supabase().auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign-out failed: {e}")
            return False
