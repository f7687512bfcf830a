from fastapi import APIRouter, Depends
from outmentor.database.supabase_client import get_supabase
from outmentor.modules.reports.schemas import ReportCreate, ReportResponse, ReportStatus, ReportSummary
from outmentor.modules.reports.service import ReportService
from outmentor.core.dependencies import get_current_session, require_admin
from outmentor.core.session import ActorSession
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/reports", tags=["reports"])


def get_report_service(supabase: Client = Depends(get_supabase)) -> ReportService:
    return ReportService(supabase)


@router.post("", response_model=ReportResponse, status_code=201)
async def file_report(
    report_data: ReportCreate,
    session: ActorSession = Depends(get_current_session),
    service: ReportService = Depends(get_report_service)
):
    """Report another member's profile"""
    report_id = service.file_report(
        session.actor_id,
        report_data.reported_profile_id,
        report_data.reason,
        report_data.details
    )
    return service.get_report(report_id)


@router.get("", response_model=List[ReportResponse])
async def list_reports(
    status: Optional[ReportStatus] = None,
    session: ActorSession = Depends(require_admin),
    service: ReportService = Depends(get_report_service)
):
    """List reports newest first (admin only)"""
    return service.list_reports(status)


@router.get("/summary", response_model=ReportSummary)
async def report_summary(
    session: ActorSession = Depends(require_admin),
    service: ReportService = Depends(get_report_service)
):
    return service.summarize()


@router.post("/{report_id}/resolve", response_model=ReportResponse)
async def resolve_report(
    report_id: str,
    session: ActorSession = Depends(require_admin),
    service: ReportService = Depends(get_report_service)
):
    return service.resolve_report(session.actor_id, report_id)


@router.post("/{report_id}/reject", response_model=ReportResponse)
async def reject_report(
    report_id: str,
    session: ActorSession = Depends(require_admin),
    service: ReportService = Depends(get_report_service)
):
    return service.reject_report(session.actor_id, report_id)


@router.delete("/{report_id}", status_code=204)
async def delete_report(
    report_id: str,
    session: ActorSession = Depends(require_admin),
    service: ReportService = Depends(get_report_service)
):
    """Delete a resolved or rejected report (admin only)"""
    service.delete_report(session.actor_id, report_id)
    return None
