from supabase import Client
from outmentor.config import settings
from outmentor.core.errors import StoreFailure
from outmentor.core.regions import canonicalize
from outmentor.core.session import ActorSession
from outmentor.modules.directory.schemas import DirectoryFilters
from outmentor.modules.profiles.schemas import ProfileResponse, ProfileRole
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

DIRECTORY_COLUMNS = (
    "id, role, full_name, region, city, bio, avatar_url, is_mentor_verified, "
    "mentor_details(*), team_details(*)"
)

# Stays within PostgREST max-rows so a short page really means the end
SEARCH_PAGE_SIZE = 1000


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DirectoryService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _query(self, session: ActorSession, target_role: ProfileRole, name: str, exact_region: Optional[str]):
        query = self.supabase.table("profiles")\
            .select(DIRECTORY_COLUMNS)\
            .neq("id", session.actor_id)\
            .eq("role", target_role.value)
        if name:
            query = query.ilike("full_name", f"%{escape_like(name)}%")
        if exact_region:
            query = query.eq("region", exact_region)
        return query

    def _search_state(self, session: ActorSession, target_role: ProfileRole, name: str, state: str, limit: int) -> List[dict]:
        # Stored spellings vary, so candidates are paged in and matched here
        matches: List[dict] = []
        start = 0
        while len(matches) < limit:
            page = self._query(session, target_role, name, None)\
                .order("id")\
                .range(start, start + SEARCH_PAGE_SIZE - 1)\
                .execute().data or []
            matches.extend(row for row in page if canonicalize(row.get("region")) == state)
            if len(page) < SEARCH_PAGE_SIZE:
                break
            start += SEARCH_PAGE_SIZE
        return matches[:limit]

    def search(self, session: ActorSession, filters: Optional[DirectoryFilters] = None) -> List[ProfileResponse]:
        """
        Profiles of the opposite role, excluding the searcher, capped at
        settings.search_result_limit.

        A region filter that names a state matches stored regions through the
        same normalization as the regional statistics ("sao paulo" finds
        members who typed "São Paulo"). Any other region value must match
        exactly.
        """
        filters = filters or DirectoryFilters()
        if session.role is None:
            return []
        target_role = ProfileRole(session.role).opposite
        limit = settings.search_result_limit
        name = (filters.name or "").strip()
        region = (filters.region or "").strip()
        state = canonicalize(region) if region else None

        try:
            if state is None:
                rows = self._query(session, target_role, name, region or None).limit(limit).execute().data or []
            else:
                rows = self._search_state(session, target_role, name, state, limit)
        except Exception as e:
            logger.error(f"Directory search failed for {session.actor_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

        return [ProfileResponse(**row) for row in rows]
