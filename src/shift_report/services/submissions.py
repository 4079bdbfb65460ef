"""Report submission pipeline."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from shift_report.domain.errors import ImageDecodeError, ShiftReportError
from shift_report.domain.notifications import notification_from_report
from shift_report.domain.reports import (
    NewReport,
    PhotoEntry,
    Report,
    ReportDraft,
    ReportForm,
    Reporter,
)
from shift_report.domain.stages import stage_config
from shift_report.services.images import (
    NormalizedImage,
    decode_data_url,
    normalize_image,
)
from shift_report.services.relay import NotificationDispatcher
from shift_report.services.reports import ReportService
from shift_report.services.uploads import PhotoUploader, photo_key
from shift_report.services.validation import validate_form

logger = logging.getLogger(__name__)

NOON = 12


@dataclass(frozen=True)
class SubmissionResult:
    """Stored report plus photo slots that could not be decoded."""

    report: Report
    skipped_photos: list[int] = field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SubmissionService:
    """Validate, upload photos, store the report, then notify.

    Photos are uploaded before the report is written, and the notification is
    dispatched only after the write committed. Delivery problems never reach
    the submitter. Photo decoding runs in a worker thread.
    """

    uploader: PhotoUploader
    report_service: ReportService
    dispatcher: NotificationDispatcher
    timezone: str = "Asia/Seoul"
    clock: Callable[[], datetime] = _utcnow

    async def submit(self, reporter: Reporter, form: ReportForm) -> SubmissionResult:
        """Run the full submission for one report form."""
        draft = validate_form(form)
        submitted_at = self.clock().astimezone(ZoneInfo(self.timezone))
        images, skipped = await asyncio.to_thread(_normalize_photos, draft)

        uploaded_keys: list[str] = []
        try:
            photos = self._upload_photos(
                reporter, submitted_at, draft, images, uploaded_keys
            )
            report = self.report_service.submit(
                NewReport(
                    reporter=reporter,
                    shift_stage=draft.shift_stage,
                    busy_level=draft.busy_level,
                    summary_for_boss=draft.summary_for_boss,
                    issues=draft.issues,
                    checklist=draft.checklist,
                    photos=photos,
                    date=format_report_date(submitted_at),
                    timestamp=format_report_time(submitted_at),
                )
            )
        except ShiftReportError:
            logger.exception(
                "Report submission aborted", extra={"reporter_uid": reporter.uid}
            )
            self.uploader.discard(uploaded_keys)
            raise

        logger.info(
            "Report stored",
            extra={"report_id": str(report.id), "reporter_uid": reporter.uid},
        )
        self._notify(report)
        return SubmissionResult(report=report, skipped_photos=skipped)

    def _upload_photos(
        self,
        reporter: Reporter,
        submitted_at: datetime,
        draft: ReportDraft,
        images: list[tuple[int, NormalizedImage]],
        uploaded_keys: list[str],
    ) -> list[PhotoEntry]:
        config = stage_config(draft.shift_stage)
        photos: list[PhotoEntry] = []
        for index, image in images:
            key = photo_key(reporter.uid, submitted_at, index)
            self.uploader.upload(key, image)
            uploaded_keys.append(key)
            url = self.uploader.url_for(key)
            photos.append(PhotoEntry(url=url, label=config.photo_label(index)))
        return photos

    def _notify(self, report: Report) -> None:
        try:
            self.dispatcher.dispatch(notification_from_report(report))
        except Exception:
            logger.exception(
                "Failed to dispatch report notification",
                extra={"report_id": str(report.id)},
            )


def _normalize_photos(
    draft: ReportDraft,
) -> tuple[list[tuple[int, NormalizedImage]], list[int]]:
    """Normalize filled slots; undecodable photos are dropped and reported."""
    images: list[tuple[int, NormalizedImage]] = []
    skipped: list[int] = []
    for slot in draft.photo_slots:
        try:
            images.append((slot.index, normalize_image(decode_data_url(slot.data_url))))
        except ImageDecodeError as exc:
            logger.warning(
                "Dropping photo that could not be decoded: %s",
                exc,
                extra={"photo_index": slot.index},
            )
            skipped.append(slot.index)
    return images, skipped


def format_report_date(value: datetime) -> str:
    """Format a date the way ko-KR locales display it, e.g. 2026. 10. 19."""
    return f"{value.year}. {value.month}. {value.day}."


def format_report_time(value: datetime) -> str:
    """Format a time as ko-KR 12-hour clock, e.g. 오후 03:45."""
    period = "오전" if value.hour < NOON else "오후"
    hour = value.hour % NOON or NOON
    return f"{period} {hour:02d}:{value.minute:02d}"
