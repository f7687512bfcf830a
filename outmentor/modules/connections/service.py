from supabase import Client
from outmentor.database.supabase_client import fetch_one
from outmentor.core.errors import NotFound, RoleMismatch, StoreFailure
from outmentor.core.session import ActorSession
from outmentor.modules.connections.schemas import (
    CONNECTION_ACCEPTED, ConnectionResponse, ConnectionEntry
)
from outmentor.modules.profiles.schemas import ProfileResponse, ProfileRole
from outmentor.modules.profiles.service import ProfileService
from typing import List, Optional, Union
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

RoleLike = Union[ProfileRole, str, None]


def _role_columns(role: ProfileRole):
    """(own column, peer column) for a profile of the given role"""
    if role == ProfileRole.MENTOR:
        return "mentor_id", "team_id"
    return "team_id", "mentor_id"


def _as_role(role: RoleLike) -> Optional[ProfileRole]:
    if role is None or isinstance(role, ProfileRole):
        return role
    try:
        return ProfileRole(role)
    except ValueError:
        return None


class ConnectionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_connection(
        self,
        initiator_id: str,
        initiator_role: RoleLike,
        target_id: str,
        target_role: RoleLike
    ) -> str:
        """
        Link a mentor and a team; either side may initiate. Returns the connection id.

        The link is stored already accepted. Creating the same pair again
        returns the existing connection instead of adding a duplicate row.
        """
        initiator_role = _as_role(initiator_role)
        target_role = _as_role(target_role)
        if initiator_role is None or target_role is None or initiator_role == target_role:
            raise RoleMismatch()

        if initiator_role == ProfileRole.MENTOR:
            mentor_id, team_id = initiator_id, target_id
        else:
            mentor_id, team_id = target_id, initiator_id

        try:
            result = self.supabase.table("connections").upsert(
                {"mentor_id": mentor_id, "team_id": team_id, "status": CONNECTION_ACCEPTED},
                on_conflict="mentor_id,team_id",
                ignore_duplicates=True
            ).execute()

            if result.data:
                connection_id = result.data[0]["id"]
                logger.info(f"Connection {connection_id} created: mentor={mentor_id} team={team_id}")
                return connection_id

            # Pair already linked: the upsert skipped the row
            existing = self.supabase.table("connections")\
                .select("id")\
                .eq("mentor_id", mentor_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not existing.data:
                raise StoreFailure("Failed to create connection")
            return existing.data[0]["id"]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating connection mentor={mentor_id} team={team_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def connect(self, session: ActorSession, target_id: str) -> ConnectionResponse:
        """Create a connection from the session's profile to target_id, looking up the target's role"""
        target = ProfileService(self.supabase).find_profile_row(target_id, "id, role")
        if not target:
            raise NotFound("Profile not found")

        connection_id = self.create_connection(
            session.actor_id, session.role, target_id, target.get("role")
        )
        return self.get_connection(connection_id)

    def get_connection(self, connection_id: str) -> ConnectionResponse:
        try:
            row = fetch_one(self.supabase.table("connections").select("*").eq("id", connection_id))
            if not row:
                raise NotFound("Connection not found")

            return ConnectionResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading connection {connection_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def list_connections(self, profile_id: str, profile_role: RoleLike) -> List[ConnectionEntry]:
        """Accepted connections of a profile, each with the opposite-role peer profile"""
        role = _as_role(profile_role)
        if role is None:
            return []
        own_column, peer_column = _role_columns(role)
        try:
            result = self.supabase.table("connections")\
                .select(f"id, status, mentor_id, team_id, peer:{peer_column}(*)")\
                .eq(own_column, profile_id)\
                .eq("status", CONNECTION_ACCEPTED)\
                .execute()

            entries = []
            for row in result.data or []:
                if not row.get("peer"):
                    continue
                entries.append(ConnectionEntry(
                    connection_id=row["id"],
                    status=row["status"],
                    peer=ProfileResponse(**row["peer"])
                ))
            return entries
        except Exception as e:
            logger.error(f"Error listing connections for {profile_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e
