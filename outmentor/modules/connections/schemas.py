from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from outmentor.modules.profiles.schemas import ProfileResponse

CONNECTION_ACCEPTED = "accepted"


class ConnectionCreate(BaseModel):
    target_id: str


class ConnectionResponse(BaseModel):
    id: str
    mentor_id: str
    team_id: str
    status: str = CONNECTION_ACCEPTED
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConnectionEntry(BaseModel):
    """One of my connections, seen from my side: the peer profile and the link id"""
    connection_id: str
    status: str
    peer: ProfileResponse
