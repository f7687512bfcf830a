from fastapi import APIRouter, Depends
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.directory.schemas import DirectoryFilters
from outmentor.modules.directory.service import DirectoryService
from outmentor.modules.profiles.schemas import ProfileResponse
from outmentor.core.dependencies import require_member
from outmentor.core.session import ActorSession
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/directory", tags=["directory"])


def get_directory_service(supabase: Client = Depends(get_supabase)) -> DirectoryService:
    return DirectoryService(supabase)


@router.get("", response_model=List[ProfileResponse])
async def search_directory(
    region: Optional[str] = None,
    name: Optional[str] = None,
    session: ActorSession = Depends(require_member),
    service: DirectoryService = Depends(get_directory_service)
):
    """Find mentors (for teams) or teams (for mentors) by region and name"""
    return service.search(session, DirectoryFilters(region=region, name=name))
