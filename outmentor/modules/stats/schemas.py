from pydantic import BaseModel
from typing import List
from enum import Enum


class SortKey(str, Enum):
    REGION = "region"
    MENTOR_COUNT = "mentor_count"
    TEAM_COUNT = "team_count"
    TOTAL = "total"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class RegionStat(BaseModel):
    region: str
    mentor_count: int = 0
    team_count: int = 0
    total: int = 0


class RegionStatsResponse(BaseModel):
    rows: List[RegionStat]
    total_mentors: int
    total_teams: int
    total_members: int
