from pydantic import BaseModel, EmailStr
from typing import Optional

from outmentor.modules.profiles.schemas import ProfileRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    role: ProfileRole
    full_name: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    role: ProfileRole
    message: str
