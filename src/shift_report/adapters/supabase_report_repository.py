"""Supabase-backed report repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from shift_report.domain.errors import StoreError
from shift_report.domain.reports import NewReport, PhotoEntry, Report, Reporter
from shift_report.domain.stages import BusyLevel, ShiftStage
from shift_report.services.reports import ReportRepository

_COLUMNS = (
    "id, reporter_uid, reporter_name, reporter_email, shift_stage, busy_level, "
    "summary_for_boss, issues, checklist, photos, has_photo, date, timestamp, "
    "created_at"
)


@dataclass
class SupabaseReportRepository(ReportRepository):
    """Supabase implementation for report persistence."""

    client: Client

    def create_report(self, report: NewReport) -> Report:
        """Insert a report row; created_at is assigned by the database."""
        try:
            response = (
                self.client.table("reports")
                .insert(
                    {
                        "reporter_uid": report.reporter.uid,
                        "reporter_name": report.reporter.name,
                        "reporter_email": report.reporter.email,
                        "shift_stage": report.shift_stage.value,
                        "busy_level": report.busy_level.value,
                        "summary_for_boss": report.summary_for_boss,
                        "issues": report.issues,
                        "checklist": report.checklist,
                        "photos": [
                            {"url": photo.url, "label": photo.label}
                            for photo in report.photos
                        ],
                        "has_photo": report.has_photo,
                        "date": report.date,
                        "timestamp": report.timestamp,
                    }
                )
                .execute()
            )
        except Exception as exc:
            raise StoreError(f"Failed to store report: {exc}") from exc
        if not response.data:
            raise StoreError("Failed to store report")
        return _parse_row(response.data[0])

    def list_reports(
        self, reporter_uid: str | None, limit: int, offset: int
    ) -> list[Report]:
        """Return reports newest first, optionally for one reporter."""
        try:
            query = self.client.table("reports").select(_COLUMNS)
            if reporter_uid is not None:
                query = query.eq("reporter_uid", reporter_uid)
            response = (
                query.order("created_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )
        except Exception as exc:
            raise StoreError(f"Failed to load reports: {exc}") from exc
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> Report:
    photos = [
        PhotoEntry(url=str(photo["url"]), label=str(photo.get("label", "")))
        for photo in row.get("photos") or []
        if isinstance(photo, dict) and photo.get("url")
    ]
    checklist = row.get("checklist") or {}
    return Report(
        id=UUID(str(row["id"])),
        reporter=Reporter(
            uid=str(row["reporter_uid"]),
            name=str(row.get("reporter_name") or "Unknown"),
            email=row.get("reporter_email"),
        ),
        shift_stage=ShiftStage(row["shift_stage"]),
        busy_level=BusyLevel(row.get("busy_level") or BusyLevel.NORMAL.value),
        summary_for_boss=str(row.get("summary_for_boss") or ""),
        issues=str(row.get("issues") or ""),
        checklist={str(key): bool(value) for key, value in checklist.items()},
        photos=photos,
        has_photo=bool(row.get("has_photo", bool(photos))),
        date=str(row.get("date") or ""),
        timestamp=str(row.get("timestamp") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
