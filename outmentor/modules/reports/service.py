from supabase import Client
from outmentor.database.supabase_client import fetch_one
from outmentor.core.errors import NotFound, OutMentorError, SelfReport, StoreFailure
from outmentor.modules.profiles.service import ProfileService
from outmentor.modules.reports.schemas import ReportReason, ReportResponse, ReportStatus, ReportSummary
from outmentor.modules.reports.workflow import ensure_deletable, transition
from typing import List, Optional, Union
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

REPORT_WITH_PARTIES = (
    "id, reporter_id, reported_profile_id, reason, details, status, created_at, resolved_at, resolver_id, "
    "reporter:reporter_id(id, full_name, email), "
    "reported:reported_profile_id(id, full_name, email)"
)


class ReportService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def file_report(
        self,
        reporter_id: str,
        reported_id: str,
        reason: Union[ReportReason, str],
        details: Optional[str] = None
    ) -> str:
        """File a pending report against another member's profile. Returns the report id."""
        if reporter_id == reported_id:
            raise SelfReport()
        try:
            reason = ReportReason(reason)
        except ValueError:
            raise OutMentorError(f"Unknown report reason: {reason}")
        if not ProfileService(self.supabase).find_profile_row(reported_id, "id"):
            raise NotFound("Profile not found")

        try:
            result = self.supabase.table("reports").insert({
                "reporter_id": reporter_id,
                "reported_profile_id": reported_id,
                "reason": reason.value,
                "details": details or None,
                "status": ReportStatus.PENDING.value
            }).execute()

            if not result.data:
                raise StoreFailure("Failed to file report")

            report_id = result.data[0]["id"]
            logger.info(f"Report {report_id} filed by {reporter_id} against {reported_id} ({reason.value})")
            return report_id
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error filing report against {reported_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def get_report(self, report_id: str) -> ReportResponse:
        try:
            row = fetch_one(self.supabase.table("reports").select(REPORT_WITH_PARTIES).eq("id", report_id))
            if not row:
                raise NotFound("Report not found")

            return ReportResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading report {report_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def list_reports(self, status: Optional[ReportStatus] = None) -> List[ReportResponse]:
        """All reports newest first, with reporter and reported display names"""
        try:
            query = self.supabase.table("reports").select(REPORT_WITH_PARTIES)
            if status is not None:
                query = query.eq("status", ReportStatus(status).value)
            result = query.order("created_at", desc=True).execute()
            return [ReportResponse(**report) for report in result.data or []]
        except Exception as e:
            logger.error(f"Error listing reports: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def summarize(self) -> ReportSummary:
        try:
            result = self.supabase.table("reports").select("status").execute()
        except Exception as e:
            logger.error(f"Error summarizing reports: {e}")
            raise StoreFailure(str(e), cause=e) from e
        counts = {status: 0 for status in ReportStatus}
        for row in result.data or []:
            counts[ReportStatus(row["status"])] += 1
        return ReportSummary(
            total=sum(counts.values()),
            pending=counts[ReportStatus.PENDING],
            resolved=counts[ReportStatus.RESOLVED],
            rejected=counts[ReportStatus.REJECTED]
        )

    def _decide(self, admin_id: str, report_id: str, target: ReportStatus) -> ReportResponse:
        report = self.get_report(report_id)
        new_status = transition(report.status, target)
        try:
            result = self.supabase.table("reports")\
                .update({
                    "status": new_status.value,
                    "resolver_id": admin_id,
                    "resolved_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", report_id)\
                .execute()

            if not result.data:
                raise NotFound("Report not found")

            logger.info(f"Report {report_id}: {report.status.value} -> {new_status.value} by {admin_id}")
            return ReportResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating report {report_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e

    def resolve_report(self, admin_id: str, report_id: str) -> ReportResponse:
        return self._decide(admin_id, report_id, ReportStatus.RESOLVED)

    def reject_report(self, admin_id: str, report_id: str) -> ReportResponse:
        return self._decide(admin_id, report_id, ReportStatus.REJECTED)

    def delete_report(self, admin_id: str, report_id: str) -> None:
        """Delete a decided report; pending reports stay as the audit trail of open cases"""
        report = self.get_report(report_id)
        ensure_deletable(report.status)
        try:
            # Status filter keeps the delete conditional on the report still being decided
            result = self.supabase.table("reports")\
                .delete()\
                .eq("id", report_id)\
                .in_("status", [ReportStatus.RESOLVED.value, ReportStatus.REJECTED.value])\
                .execute()

            if not result.data:
                raise NotFound("Report not found")

            logger.info(f"Report {report_id} deleted by {admin_id}")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting report {report_id}: {e}")
            raise StoreFailure(str(e), cause=e) from e
