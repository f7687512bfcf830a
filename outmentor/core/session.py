from pydantic import BaseModel, Field
from typing import Optional

from outmentor.modules.profiles.schemas import ProfileRole


class ActorSession(BaseModel):
    """
    The authenticated member performing a request.

    Built once per request by the auth dependency and passed explicitly into
    service calls, so no operation reads the current user from global state.
    """
    actor_id: str = Field(..., description="Authenticated profile id")
    role: Optional[ProfileRole] = Field(None, description="mentor or team; None for staff-only accounts")
    is_admin: bool = False
    email: Optional[str] = None
    access_token: Optional[str] = Field(None, repr=False)

    def is_self(self, profile_id: str) -> bool:
        return self.actor_id == profile_id
