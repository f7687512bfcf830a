"""
Member counts per Brazilian state.

Pure functions over profile rows ({"region": ..., "role": ...}); the service
feeds them from the profiles table.
"""

from typing import Iterable, List, Mapping, Union

from outmentor.core.regions import BRAZILIAN_STATES, UNMATCHED_REGION, canonicalize, collation_key
from outmentor.modules.profiles.schemas import ProfileRole
from outmentor.modules.stats.schemas import RegionStat, RegionStatsResponse, SortDirection, SortKey


def _role_of(profile: Mapping):
    try:
        return ProfileRole(profile.get("role"))
    except ValueError:
        return None


def aggregate(profiles: Iterable[Mapping]) -> List[RegionStat]:
    """
    One row per canonical state in canonical order, plus a trailing row keyed
    by "" for members whose region matches no state (only when non-empty).

    Rows without a mentor/team role are ignored.
    """
    buckets = {state: RegionStat(region=state) for state in BRAZILIAN_STATES}
    unmatched = RegionStat(region=UNMATCHED_REGION)

    for profile in profiles:
        role = _role_of(profile)
        if role is None:
            continue
        state = canonicalize(profile.get("region"))
        bucket = buckets[state] if state else unmatched
        if role == ProfileRole.MENTOR:
            bucket.mentor_count += 1
        else:
            bucket.team_count += 1
        bucket.total = bucket.mentor_count + bucket.team_count

    rows = [buckets[state] for state in BRAZILIAN_STATES]
    if unmatched.total > 0:
        rows.append(unmatched)
    return rows


def sort_stats(
    rows: Iterable[RegionStat],
    key: Union[SortKey, str] = SortKey.TOTAL,
    direction: Union[SortDirection, str] = SortDirection.DESC
) -> List[RegionStat]:
    """Sort rows by region name (accent/case-insensitive) or by a count column"""
    key = SortKey(key)
    reverse = SortDirection(direction) == SortDirection.DESC
    if key == SortKey.REGION:
        return sorted(rows, key=lambda row: collation_key(row.region), reverse=reverse)
    return sorted(rows, key=lambda row: getattr(row, key.value), reverse=reverse)


def summarize(rows: List[RegionStat]) -> RegionStatsResponse:
    total_mentors = sum(row.mentor_count for row in rows)
    total_teams = sum(row.team_count for row in rows)
    return RegionStatsResponse(
        rows=rows,
        total_mentors=total_mentors,
        total_teams=total_teams,
        total_members=total_mentors + total_teams
    )
