from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class MeetingCreate(BaseModel):
    title: Optional[str] = None


class MeetingResponse(BaseModel):
    id: str
    connection_id: str
    title: str
    scheduled_at: datetime
    meet_link: str

    class Config:
        from_attributes = True
