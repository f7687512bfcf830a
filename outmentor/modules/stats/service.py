from supabase import Client
from outmentor.core.errors import StoreFailure
from outmentor.modules.stats.aggregator import aggregate, sort_stats, summarize
from outmentor.modules.stats.schemas import RegionStatsResponse, SortDirection, SortKey
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

# PostgREST caps each response (max-rows); read the catalog in pages
CATALOG_PAGE_SIZE = 1000


class RegionStatsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch_catalog(self) -> List[dict]:
        rows: List[dict] = []
        start = 0
        try:
            while True:
                result = self.supabase.table("profiles")\
                    .select("region, role")\
                    .order("id")\
                    .range(start, start + CATALOG_PAGE_SIZE - 1)\
                    .execute()
                page = result.data or []
                rows.extend(page)
                if len(page) < CATALOG_PAGE_SIZE:
                    return rows
                start += CATALOG_PAGE_SIZE
        except Exception as e:
            logger.error(f"Error loading profiles for region statistics: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def get_region_stats(
        self,
        sort_by: Optional[SortKey] = None,
        order: SortDirection = SortDirection.DESC
    ) -> RegionStatsResponse:
        """Recompute per-state counts from the whole profile catalog"""
        rows = aggregate(self._fetch_catalog())
        if sort_by is not None:
            rows = sort_stats(rows, sort_by, order)
        return summarize(rows)
