from fastapi import APIRouter, Depends
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.stats.schemas import RegionStatsResponse, SortDirection, SortKey
from outmentor.modules.stats.service import RegionStatsService
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/stats", tags=["stats"])


def get_stats_service(supabase: Client = Depends(get_supabase)) -> RegionStatsService:
    return RegionStatsService(supabase)


@router.get("/regions", response_model=RegionStatsResponse)
async def region_stats(
    sort_by: Optional[SortKey] = None,
    order: SortDirection = SortDirection.DESC,
    service: RegionStatsService = Depends(get_stats_service)
):
    """Mentors and teams per state (public landing-page statistics)"""
    return service.get_region_stats(sort_by, order)
