from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


class ProfileRole(str, Enum):
    MENTOR = "mentor"
    TEAM = "team"

    @property
    def opposite(self) -> "ProfileRole":
        return ProfileRole.TEAM if self is ProfileRole.MENTOR else ProfileRole.MENTOR


class TeamType(str, Enum):
    FTC = "FTC"
    FLL = "FLL"


def _first_embedded(value):
    # PostgREST returns a list for one-to-many embeds and an object for one-to-one
    if isinstance(value, list):
        return value[0] if value else None
    return value


class MentorDetails(BaseModel):
    mentor_ftc: bool = False
    mentor_fll: bool = False
    knowledge_areas: List[str] = []


class TeamDetails(BaseModel):
    team_number: Optional[str] = None
    team_type: Optional[TeamType] = None
    interest_areas: List[str] = []


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    mentor_details: Optional[MentorDetails] = None
    team_details: Optional[TeamDetails] = None


class ProfileSummary(BaseModel):
    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[ProfileRole] = None

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: Optional[ProfileRole] = None
    full_name: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    gravatar_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    is_admin: bool = False
    is_mentor_verified: bool = False
    last_avatar_checked: Optional[datetime] = None
    mentor_details: Optional[MentorDetails] = None
    team_details: Optional[TeamDetails] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("mentor_details", "team_details", mode="before")
    @classmethod
    def unwrap_embedded(cls, value):
        return _first_embedded(value)

    @field_validator("is_admin", "is_mentor_verified", mode="before")
    @classmethod
    def null_flag_is_false(cls, value):
        return bool(value)

    class Config:
        from_attributes = True


class ProfileFlagUpdate(BaseModel):
    value: bool


class ProfileDeleteResponse(BaseModel):
    deleted: bool
    signed_out: bool
