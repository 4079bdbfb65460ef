"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from shift_report.adapters.slack_webhook_client import HttpxSlackWebhookClient
from shift_report.adapters.smtp_email_client import SmtpEmailClient
from shift_report.adapters.supabase_blob_storage import SupabaseBlobStorage
from shift_report.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from shift_report.adapters.supabase_report_repository import (
    SupabaseReportRepository,
)
from shift_report.config import Settings
from shift_report.services.identity import IdentityProvider
from shift_report.services.rate_limit import RateLimiter, SlidingWindowRateLimiter
from shift_report.services.relay import NotificationDispatcher, NotificationRelay
from shift_report.services.reports import ReportService
from shift_report.services.submissions import SubmissionService
from shift_report.services.uploads import PhotoUploader


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_provider: IdentityProvider
    report_service: ReportService
    submission_service: SubmissionService
    notification_relay: NotificationRelay
    notification_dispatcher: NotificationDispatcher
    rate_limiter: RateLimiter
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    identity_provider = SupabaseIdentityProvider(supabase_client)
    report_service = ReportService(
        repository=SupabaseReportRepository(supabase_client),
        privileged_viewer_email=resolved_settings.privileged_viewer_email,
    )
    uploader = PhotoUploader(
        SupabaseBlobStorage(
            client=supabase_client,
            bucket=resolved_settings.storage_bucket,
            signed_url_ttl_seconds=resolved_settings.storage_signed_url_ttl_seconds,
        )
    )

    slack_client = (
        HttpxSlackWebhookClient.create(resolved_settings.slack_webhook_url)
        if resolved_settings.slack_webhook_url
        else None
    )
    email_client = None
    if resolved_settings.email_configured:
        email_client = SmtpEmailClient(
            hostname=resolved_settings.smtp_host,
            port=resolved_settings.smtp_port,
            username=resolved_settings.smtp_username or "",
            password=resolved_settings.smtp_password or "",
            sender_name=resolved_settings.mail_sender_name,
            recipient=resolved_settings.boss_email or "",
        )
    relay = NotificationRelay(
        slack_client=slack_client,
        email_client=email_client,
        embed_images=resolved_settings.slack_embed_images,
    )
    dispatcher = NotificationDispatcher(
        relay=relay, max_concurrency=resolved_settings.notification_concurrency
    )
    submission_service = SubmissionService(
        uploader=uploader,
        report_service=report_service,
        dispatcher=dispatcher,
        timezone=resolved_settings.report_timezone,
    )
    rate_limiter = SlidingWindowRateLimiter(
        max_requests=resolved_settings.rate_limit_max_requests,
        window_seconds=resolved_settings.rate_limit_window_seconds,
    )

    async def close_resources() -> None:
        await dispatcher.drain()
        if slack_client is not None:
            await slack_client.close()

    return AppContainer(
        settings=resolved_settings,
        identity_provider=identity_provider,
        report_service=report_service,
        submission_service=submission_service,
        notification_relay=relay,
        notification_dispatcher=dispatcher,
        rate_limiter=rate_limiter,
        close_resources=close_resources,
    )
