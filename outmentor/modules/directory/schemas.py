from pydantic import BaseModel
from typing import Optional


class DirectoryFilters(BaseModel):
    region: Optional[str] = None
    name: Optional[str] = None
