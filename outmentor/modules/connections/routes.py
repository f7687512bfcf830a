from fastapi import APIRouter, Depends
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.connections.schemas import ConnectionCreate, ConnectionResponse, ConnectionEntry
from outmentor.modules.connections.service import ConnectionService
from outmentor.core.dependencies import require_member
from outmentor.core.session import ActorSession
from supabase import Client
from typing import List

router = APIRouter(prefix="/connections", tags=["connections"])


def get_connection_service(supabase: Client = Depends(get_supabase)) -> ConnectionService:
    return ConnectionService(supabase)


@router.post("", response_model=ConnectionResponse, status_code=201)
async def create_connection(
    connection_data: ConnectionCreate,
    session: ActorSession = Depends(require_member),
    service: ConnectionService = Depends(get_connection_service)
):
    """Connect the current mentor/team with a profile of the opposite role"""
    return service.connect(session, connection_data.target_id)


@router.get("", response_model=List[ConnectionEntry])
async def list_connections(
    session: ActorSession = Depends(require_member),
    service: ConnectionService = Depends(get_connection_service)
):
    """List my accepted connections"""
    return service.list_connections(session.actor_id, session.role)
