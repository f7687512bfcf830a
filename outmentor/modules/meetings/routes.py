from fastapi import APIRouter, Depends
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.meetings.schemas import MeetingCreate, MeetingResponse
from outmentor.modules.meetings.service import MeetingService
from outmentor.core.dependencies import get_current_session
from outmentor.core.session import ActorSession
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/connections", tags=["meetings"])


def get_meeting_service(supabase: Client = Depends(get_supabase)) -> MeetingService:
    return MeetingService(supabase)


@router.post("/{connection_id}/meetings", response_model=MeetingResponse, status_code=201)
async def create_meeting(
    connection_id: str,
    meeting_data: Optional[MeetingCreate] = None,
    session: ActorSession = Depends(get_current_session),
    service: MeetingService = Depends(get_meeting_service)
):
    """Record a meeting and return the video link to open"""
    title = meeting_data.title if meeting_data else None
    return service.schedule(session, connection_id, title)
