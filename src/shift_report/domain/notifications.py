"""Payload models for report notifications."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from shift_report.domain.reports import Report
from shift_report.domain.stages import stage_config


class PhotoPayload(BaseModel):
    """Photo reference included in a notification."""

    url: str
    label: str = "현장 사진"


class ChecklistDetail(BaseModel):
    """Rendered checklist line."""

    label: str
    checked: bool


class ReportNotification(BaseModel):
    """Report payload accepted by the relay."""

    shift_stage: str | None = None
    reporter_name: str | None = None
    date: str = ""
    timestamp: str = ""
    summary_for_boss: str | None = None
    issues: str | None = None
    photos: list[PhotoPayload] = Field(default_factory=list)
    checklist_details: list[ChecklistDetail] | None = None


@dataclass(frozen=True)
class SlackMessage:
    """Rendered Block Kit message."""

    blocks: list[dict[str, object]]


@dataclass(frozen=True)
class EmailMessage:
    """Rendered HTML email."""

    subject: str
    html: str


def notification_from_report(report: Report) -> ReportNotification:
    """Build the relay payload for a stored report."""
    config = stage_config(report.shift_stage)
    return ReportNotification(
        shift_stage=report.shift_stage.value,
        reporter_name=report.reporter.name,
        date=report.date,
        timestamp=report.timestamp,
        summary_for_boss=report.summary_for_boss,
        issues=report.issues,
        photos=[PhotoPayload(url=p.url, label=p.label) for p in report.photos],
        checklist_details=[
            ChecklistDetail(
                label=item.label, checked=bool(report.checklist.get(item.id))
            )
            for item in config.checklist
        ],
    )
