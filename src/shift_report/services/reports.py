"""Report persistence and history queries."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from shift_report.domain.reports import NewReport, Report, Reporter

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


class ReportScope(Enum):
    """Which reports a viewer may list."""

    OWNED = "owned"
    ALL = "all"


class ReportRepository(Protocol):
    """Persistence interface for reports."""

    def create_report(self, report: NewReport) -> Report:
        """Append a report and return it with its server-assigned fields."""

    def list_reports(
        self, reporter_uid: str | None, limit: int, offset: int
    ) -> list[Report]:
        """Return reports newest first, optionally scoped to one reporter."""


@dataclass
class ReportService:
    """Application service for writing and reading reports."""

    repository: ReportRepository
    privileged_viewer_email: str | None = None

    def submit(self, report: NewReport) -> Report:
        """Persist a fully assembled report."""
        return self.repository.create_report(report)

    def scope_for(self, viewer: Reporter) -> ReportScope:
        """Return the query scope granted to a viewer."""
        if (
            self.privileged_viewer_email
            and viewer.email
            and viewer.email.lower() == self.privileged_viewer_email.lower()
        ):
            return ReportScope.ALL
        return ReportScope.OWNED

    def query(
        self, viewer: Reporter, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0
    ) -> list[Report]:
        """Return one page of reports visible to the viewer."""
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        offset = max(offset, 0)
        reporter_uid = (
            None if self.scope_for(viewer) is ReportScope.ALL else viewer.uid
        )
        return self.repository.list_reports(reporter_uid, limit, offset)
