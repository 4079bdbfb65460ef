"""Shared test fixtures."""

import base64
import io
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from PIL import Image

from shift_report.adapters.slack_webhook_client import SlackWebhookClient
from shift_report.adapters.smtp_email_client import EmailClient
from shift_report.config import Settings
from shift_report.containers import AppContainer
from shift_report.domain.errors import DeliveryError, StoreError, UploadError
from shift_report.domain.notifications import EmailMessage, SlackMessage
from shift_report.domain.reports import NewReport, Report, Reporter
from shift_report.services.identity import IdentityProvider
from shift_report.services.rate_limit import SlidingWindowRateLimiter
from shift_report.services.relay import NotificationDispatcher, NotificationRelay
from shift_report.services.reports import ReportRepository, ReportService
from shift_report.services.submissions import SubmissionService
from shift_report.services.uploads import BlobStorage, PhotoUploader

BOSS = Reporter(uid="boss-uid", name="사장님", email="boss@example.com")
STAFF = Reporter(uid="staff-uid", name="구본록", email="staff@example.com")
OTHER_STAFF = Reporter(uid="other-uid", name="모승준", email="other@example.com")


def make_image_bytes(
    width: int, height: int, mode: str = "RGB", fmt: str = "PNG"
) -> bytes:
    color = (200, 120, 40, 128) if mode == "RGBA" else (200, 120, 40)
    image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def make_data_url(width: int = 64, height: int = 48) -> str:
    encoded = base64.b64encode(make_image_bytes(width, height)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


@dataclass
class InMemoryReportRepository(ReportRepository):
    """In-memory report repository for tests."""

    reports: list[Report] = field(default_factory=list)
    fail: bool = False
    _clock: datetime = field(
        default_factory=lambda: datetime(2026, 10, 19, tzinfo=UTC)
    )

    def create_report(self, report: NewReport) -> Report:
        if self.fail:
            raise StoreError("store unavailable")
        self._clock += timedelta(seconds=1)
        stored = Report(
            id=uuid4(),
            reporter=report.reporter,
            shift_stage=report.shift_stage,
            busy_level=report.busy_level,
            summary_for_boss=report.summary_for_boss,
            issues=report.issues,
            checklist=dict(report.checklist),
            photos=list(report.photos),
            has_photo=report.has_photo,
            date=report.date,
            timestamp=report.timestamp,
            created_at=self._clock,
        )
        self.reports.append(stored)
        return stored

    def list_reports(
        self, reporter_uid: str | None, limit: int, offset: int
    ) -> list[Report]:
        rows = [
            report
            for report in self.reports
            if reporter_uid is None or report.reporter.uid == reporter_uid
        ]
        rows.sort(key=lambda report: report.created_at, reverse=True)
        return rows[offset : offset + limit]


@dataclass
class InMemoryBlobStorage(BlobStorage):
    """In-memory blob storage for tests."""

    objects: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    fail_on_upload: int | None = None

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        if self.fail_on_upload is not None and len(self.objects) == self.fail_on_upload:
            raise UploadError("quota exceeded")
        self.objects[key] = data

    def resolve_url(self, key: str) -> str:
        return f"https://storage.test/{key}"

    def delete(self, keys: list[str]) -> None:
        for key in keys:
            self.objects.pop(key, None)
            self.deleted.append(key)


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider mapping fixed tokens to reporters."""

    tokens: dict[str, Reporter] = field(
        default_factory=lambda: {
            "staff-token": STAFF,
            "other-token": OTHER_STAFF,
            "boss-token": BOSS,
        }
    )

    def resolve(self, access_token: str) -> Reporter | None:
        return self.tokens.get(access_token)


@dataclass
class FakeSlackWebhookClient(SlackWebhookClient):
    """Slack client that records messages or fails on demand."""

    messages: list[SlackMessage] = field(default_factory=list)
    fail: bool = False

    async def post_message(self, message: SlackMessage) -> None:
        if self.fail:
            raise DeliveryError("Slack API error: 500 internal_error")
        self.messages.append(message)


@dataclass
class FakeEmailClient(EmailClient):
    """Email client that records messages or fails on demand."""

    messages: list[EmailMessage] = field(default_factory=list)
    fail: bool = False

    async def send(self, message: EmailMessage) -> None:
        if self.fail:
            raise DeliveryError("SMTP delivery failed")
        self.messages.append(message)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        slack_webhook_url="https://hooks.slack.test/services/T000/B000/XXX",
        privileged_viewer_email=BOSS.email,
    )


@pytest.fixture
def slack_client() -> FakeSlackWebhookClient:
    return FakeSlackWebhookClient()


@pytest.fixture
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def report_repository() -> InMemoryReportRepository:
    return InMemoryReportRepository()


@pytest.fixture
def blob_storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def relay(
    slack_client: FakeSlackWebhookClient, email_client: FakeEmailClient
) -> NotificationRelay:
    return NotificationRelay(slack_client=slack_client, email_client=email_client)


@pytest.fixture
def dispatcher(relay: NotificationRelay) -> NotificationDispatcher:
    return NotificationDispatcher(relay=relay, max_concurrency=2)


@pytest.fixture
def report_service(
    settings: Settings, report_repository: InMemoryReportRepository
) -> ReportService:
    return ReportService(
        repository=report_repository,
        privileged_viewer_email=settings.privileged_viewer_email,
    )


@pytest.fixture
def submission_service(
    blob_storage: InMemoryBlobStorage,
    report_service: ReportService,
    dispatcher: NotificationDispatcher,
) -> SubmissionService:
    return SubmissionService(
        uploader=PhotoUploader(blob_storage),
        report_service=report_service,
        dispatcher=dispatcher,
        clock=lambda: datetime(2026, 10, 19, 6, 45, tzinfo=UTC),
    )


@pytest.fixture
def container(
    settings: Settings,
    report_service: ReportService,
    submission_service: SubmissionService,
    relay: NotificationRelay,
    dispatcher: NotificationDispatcher,
) -> AppContainer:
    async def close_resources() -> None:
        await dispatcher.drain()

    return AppContainer(
        settings=settings,
        identity_provider=FakeIdentityProvider(),
        report_service=report_service,
        submission_service=submission_service,
        notification_relay=relay,
        notification_dispatcher=dispatcher,
        rate_limiter=SlidingWindowRateLimiter(max_requests=5, window_seconds=60),
        close_resources=close_resources,
    )
