"""SMTP email adapter built on aiosmtplib."""

from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

import aiosmtplib

from shift_report.domain.errors import DeliveryError
from shift_report.domain.notifications import EmailMessage


class EmailClient(Protocol):
    """Interface for sending rendered report emails."""

    async def send(self, message: EmailMessage) -> None:
        """Send a message to the fixed recipient."""


@dataclass
class SmtpEmailClient:
    """Sends HTML mail from one sender to one recipient over STARTTLS."""

    hostname: str
    port: int
    username: str
    password: str
    sender_name: str
    recipient: str
    timeout: float = 20

    async def send(self, message: EmailMessage) -> None:
        """Send the rendered report email."""
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = f'"{self.sender_name}" <{self.username}>'
        mime["To"] = self.recipient
        mime.attach(MIMEText(message.html, "html", "utf-8"))

        try:
            await aiosmtplib.send(
                mime,
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=True,
                timeout=self.timeout,
            )
        except aiosmtplib.SMTPException as exc:
            raise DeliveryError(f"SMTP delivery failed: {exc}") from exc
        except OSError as exc:
            raise DeliveryError(f"SMTP connection failed: {exc}") from exc
