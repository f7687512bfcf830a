from supabase import Client
from outmentor.config import settings
from outmentor.core.errors import StoreFailure
from outmentor.core.session import ActorSession
from outmentor.modules.connections.service import ConnectionService
from outmentor.modules.meetings.schemas import MeetingResponse
from typing import Optional
from fastapi import HTTPException, status
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class MeetingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_meeting(self, connection_id: str, title: Optional[str] = None) -> MeetingResponse:
        """Record a meeting marker for a connection with the provider's meeting link"""
        try:
            result = self.supabase.table("meetings").insert({
                "connection_id": connection_id,
                "title": title or settings.meeting_title,
                "scheduled_at": datetime.now(timezone.utc).isoformat(),
                "meet_link": settings.meet_link_url
            }).execute()

            if not result.data:
                raise StoreFailure("Failed to create meeting")

            logger.info(f"Meeting recorded for connection {connection_id}")
            return MeetingResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating meeting for connection {connection_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def schedule(self, session: ActorSession, connection_id: str, title: Optional[str] = None) -> MeetingResponse:
        """Create a meeting on a connection the session's profile takes part in"""
        connection = ConnectionService(self.supabase).get_connection(connection_id)
        if session.actor_id not in (connection.mentor_id, connection.team_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only members of this connection can schedule meetings"
            )
        return self.create_meeting(connection_id, title)
