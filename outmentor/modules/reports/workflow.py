"""
Report moderation state machine.

    pending  --resolve--> resolved
    pending  --reject---> rejected
    resolved --reject---> rejected     (administrator correction)
    rejected --resolve--> resolved     (administrator correction)

Repeating a decision re-stamps the resolver and time. Nothing moves a report
back to pending, and only decided reports may be deleted.
"""

from typing import Dict, FrozenSet, Union

from outmentor.core.errors import InvalidState
from outmentor.modules.reports.schemas import ReportStatus

ALLOWED_TRANSITIONS: Dict[ReportStatus, FrozenSet[ReportStatus]] = {
    ReportStatus.PENDING: frozenset({ReportStatus.RESOLVED, ReportStatus.REJECTED}),
    ReportStatus.RESOLVED: frozenset({ReportStatus.RESOLVED, ReportStatus.REJECTED}),
    ReportStatus.REJECTED: frozenset({ReportStatus.REJECTED, ReportStatus.RESOLVED}),
}


def can_transition(current: ReportStatus, target: ReportStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def transition(current: Union[ReportStatus, str], target: Union[ReportStatus, str]) -> ReportStatus:
    """Validate current -> target and return the target status, or raise InvalidState"""
    current = ReportStatus(current)
    target = ReportStatus(target)
    if not can_transition(current, target):
        raise InvalidState(f"Cannot move a {current.value} report to {target.value}")
    return target


def ensure_deletable(status: Union[ReportStatus, str]) -> None:
    if not ReportStatus(status).is_terminal:
        raise InvalidState("Only resolved or rejected reports can be deleted")
