"""Slack incoming webhook adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from shift_report.domain.errors import DeliveryError
from shift_report.domain.notifications import SlackMessage


class SlackWebhookClient(Protocol):
    """Interface for posting Block Kit messages."""

    async def post_message(self, message: SlackMessage) -> None:
        """Post a message to the configured channel."""


@dataclass
class HttpxSlackWebhookClient:
    """Slack webhook client implemented with httpx."""

    webhook_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, webhook_url: str) -> "HttpxSlackWebhookClient":
        """Create a webhook client with a managed httpx session."""
        return cls(webhook_url=webhook_url, http_client=httpx.AsyncClient())

    async def post_message(self, message: SlackMessage) -> None:
        """Post blocks to the webhook; any non-2xx answer is a delivery failure."""
        try:
            response = await self.http_client.post(
                self.webhook_url, json={"blocks": message.blocks}, timeout=10
            )
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Slack webhook request failed: {exc}") from exc
        if not response.is_success:
            raise DeliveryError(
                f"Slack API error: {response.status_code} {response.text}"
            )

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
