from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum
import unicodedata


class ReportStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ReportStatus.PENDING


class ReportReason(str, Enum):
    SPAM = "Spam"
    ABUSE = "Abuse"
    INCORRECT_INFO = "IncorrectInfo"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value):
        # Labels shown by the report form ("Abuso", "Informação incorreta", ...)
        if isinstance(value, str):
            return _REASON_ALIASES.get(unicodedata.normalize("NFC", value.strip()).casefold())
        return None


_REASON_ALIASES = {
    "spam": ReportReason.SPAM,
    "abuse": ReportReason.ABUSE,
    "abuso": ReportReason.ABUSE,
    "incorrectinfo": ReportReason.INCORRECT_INFO,
    "incorrect info": ReportReason.INCORRECT_INFO,
    "informação incorreta": ReportReason.INCORRECT_INFO,
    "other": ReportReason.OTHER,
    "outro": ReportReason.OTHER,
}


def _coerce_reason(value):
    if isinstance(value, str):
        return ReportReason(value)
    return value


class ReportCreate(BaseModel):
    reported_profile_id: str
    reason: ReportReason
    details: Optional[str] = Field(None, max_length=2000)

    @field_validator("reason", mode="before")
    @classmethod
    def normalize_reason(cls, value):
        return _coerce_reason(value)


class ReportParty(BaseModel):
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None


class ReportResponse(BaseModel):
    id: str
    reporter_id: str
    reported_profile_id: str
    reason: ReportReason
    details: Optional[str] = None
    status: ReportStatus
    resolver_id: Optional[str] = None
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    reporter: Optional[ReportParty] = None
    reported: Optional[ReportParty] = None

    @field_validator("reason", mode="before")
    @classmethod
    def normalize_reason(cls, value):
        return _coerce_reason(value)

    class Config:
        from_attributes = True


class ReportSummary(BaseModel):
    total: int
    pending: int
    resolved: int
    rejected: int
