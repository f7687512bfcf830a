from pydantic import BaseModel
from typing import List
from enum import Enum

from outmentor.modules.profiles.schemas import ProfileSummary


class FollowState(str, Enum):
    FOLLOWING = "following"
    NOT_FOLLOWING = "not_following"


class FollowToggleResponse(BaseModel):
    target_id: str
    state: FollowState
    follower_count: int


class FollowStatusResponse(BaseModel):
    target_id: str
    following: bool
    follower_count: int


class FollowersResponse(BaseModel):
    target_id: str
    count: int
    followers: List[ProfileSummary]
