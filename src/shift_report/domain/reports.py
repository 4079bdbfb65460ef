"""Domain models for shift reports."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from shift_report.domain.stages import BusyLevel, ShiftStage


@dataclass(frozen=True)
class Reporter:
    """Authenticated staff member submitting or viewing reports."""

    uid: str
    name: str
    email: str | None = None


@dataclass(frozen=True)
class PhotoEntry:
    """Uploaded photo with its caption."""

    url: str
    label: str


class ReportForm(BaseModel):
    """In-progress form state sent by the client."""

    shift_stage: ShiftStage
    busy_level: BusyLevel = BusyLevel.NORMAL
    summary_for_boss: str = ""
    issues: str = ""
    checklist: dict[str, bool] = Field(default_factory=dict)
    photos: list[str | None] = Field(default_factory=list)


@dataclass(frozen=True)
class PhotoSlot:
    """Filled photo slot awaiting normalization and upload."""

    index: int
    data_url: str


@dataclass(frozen=True)
class ReportDraft:
    """Validated form contents, not yet persisted."""

    shift_stage: ShiftStage
    busy_level: BusyLevel
    summary_for_boss: str
    issues: str
    checklist: dict[str, bool]
    photo_slots: list[PhotoSlot] = field(default_factory=list)


@dataclass(frozen=True)
class NewReport:
    """Fully assembled report ready to be written."""

    reporter: Reporter
    shift_stage: ShiftStage
    busy_level: BusyLevel
    summary_for_boss: str
    issues: str
    checklist: dict[str, bool]
    photos: list[PhotoEntry]
    date: str
    timestamp: str

    @property
    def has_photo(self) -> bool:
        return bool(self.photos)


@dataclass(frozen=True)
class Report:
    """Persisted, immutable shift report."""

    id: UUID
    reporter: Reporter
    shift_stage: ShiftStage
    busy_level: BusyLevel
    summary_for_boss: str
    issues: str
    checklist: dict[str, bool]
    photos: list[PhotoEntry]
    has_photo: bool
    date: str
    timestamp: str
    created_at: datetime

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        return {
            "id": str(self.id),
            "reporter_uid": self.reporter.uid,
            "reporter_name": self.reporter.name,
            "reporter_email": self.reporter.email,
            "shift_stage": self.shift_stage.value,
            "busy_level": self.busy_level.value,
            "summary_for_boss": self.summary_for_boss,
            "issues": self.issues,
            "checklist": dict(self.checklist),
            "photos": [{"url": p.url, "label": p.label} for p in self.photos],
            "has_photo": self.has_photo,
            "date": self.date,
            "timestamp": self.timestamp,
            "created_at": self.created_at.isoformat(),
        }
