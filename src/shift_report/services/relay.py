"""Notification relay: render a report and deliver it to Slack and email."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

from shift_report.adapters.slack_webhook_client import SlackWebhookClient
from shift_report.adapters.smtp_email_client import EmailClient
from shift_report.domain.errors import ConfigError
from shift_report.domain.notifications import (
    EmailMessage,
    ReportNotification,
    SlackMessage,
)
from shift_report.services.rendering import render_email, render_slack_blocks

logger = logging.getLogger(__name__)


class ChannelStatus(Enum):
    """Result of one delivery attempt."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RelayOutcome:
    """Per-channel delivery results."""

    slack: ChannelStatus
    email: ChannelStatus


@dataclass(frozen=True)
class PreparedNotification:
    """Rendered payloads for every channel."""

    slack: SlackMessage
    email: EmailMessage


@dataclass
class NotificationRelay:
    """Renders notifications and delivers them per channel.

    A missing client means the channel is not configured. Channel failures are
    logged and reported in the outcome, never raised.
    """

    slack_client: SlackWebhookClient | None
    email_client: EmailClient | None
    embed_images: bool = True

    def render(self, notification: ReportNotification) -> PreparedNotification:
        """Render both channel payloads."""
        return PreparedNotification(
            slack=render_slack_blocks(notification, embed_images=self.embed_images),
            email=render_email(notification),
        )

    def prepare(self, notification: ReportNotification) -> PreparedNotification:
        """Check required configuration, then render."""
        if self.slack_client is None:
            raise ConfigError("SLACK_WEBHOOK_URL is missing")
        return self.render(notification)

    async def deliver(self, notification: ReportNotification) -> RelayOutcome:
        """Render and deliver a notification."""
        try:
            prepared = self.render(notification)
        except Exception:
            logger.exception("Failed to render report notification")
            return RelayOutcome(slack=ChannelStatus.FAILED, email=ChannelStatus.FAILED)
        return await self.send(prepared)

    async def send(self, prepared: PreparedNotification) -> RelayOutcome:
        """Deliver prepared payloads to both channels concurrently."""
        slack_result, email_result = await asyncio.gather(
            self._send_slack(prepared.slack),
            self._send_email(prepared.email),
            return_exceptions=True,
        )
        return RelayOutcome(
            slack=_record("slack", slack_result),
            email=_record("email", email_result),
        )

    async def _send_slack(self, message: SlackMessage) -> None:
        if self.slack_client is None:
            raise ConfigError("SLACK_WEBHOOK_URL not configured")
        await self.slack_client.post_message(message)

    async def _send_email(self, message: EmailMessage) -> None:
        if self.email_client is None:
            raise ConfigError("SMTP credentials or recipient not configured")
        await self.email_client.send(message)


def _record(channel: str, result: BaseException | None) -> ChannelStatus:
    if result is None:
        logger.info("Report notification sent", extra={"channel": channel})
        return ChannelStatus.SENT
    if isinstance(result, ConfigError):
        logger.warning(
            "Skipping %s notification: %s", channel, result, extra={"channel": channel}
        )
        return ChannelStatus.SKIPPED
    logger.error(
        "Error sending %s notification: %s",
        channel,
        result,
        exc_info=result,
        extra={"channel": channel},
    )
    return ChannelStatus.FAILED


@dataclass
class NotificationDispatcher:
    """Runs deliveries as background tasks with bounded concurrency.

    Tasks outlive the request that scheduled them; drain() waits for every
    in-flight delivery and is called on shutdown.
    """

    relay: NotificationRelay
    max_concurrency: int = 4
    _tasks: set[asyncio.Task] = field(default_factory=set, init=False)
    _semaphore: asyncio.Semaphore | None = field(default=None, init=False)
    _loop: asyncio.AbstractEventLoop | None = field(default=None, init=False)

    def dispatch(self, notification: ReportNotification) -> asyncio.Task | None:
        """Schedule delivery of a notification."""
        return self._spawn(lambda: self.relay.deliver(notification))

    def dispatch_prepared(self, prepared: PreparedNotification) -> asyncio.Task | None:
        """Schedule delivery of already rendered payloads."""
        return self._spawn(lambda: self.relay.send(prepared))

    async def drain(self) -> None:
        """Wait until no deliveries are in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(
        self, job: Callable[[], Awaitable[RelayOutcome]]
    ) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.exception("Cannot schedule report notification without a loop")
            return None
        task = loop.create_task(self._run(job))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(
        self, job: Callable[[], Awaitable[RelayOutcome]]
    ) -> RelayOutcome | None:
        async with self._limiter():
            try:
                return await job()
            except Exception:
                logger.exception("Report notification task failed")
                return None

    def _limiter(self) -> asyncio.Semaphore:
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrency)
            self._loop = loop
        return self._semaphore
