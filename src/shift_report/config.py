"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str = "reports"
    storage_signed_url_ttl_seconds: int = 0
    slack_webhook_url: str | None = None
    slack_embed_images: bool = True
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    mail_sender_name: str = "Saladoop Report"
    boss_email: str | None = None
    privileged_viewer_email: str | None = None
    rate_limit_max_requests: int = 5
    rate_limit_window_seconds: float = 60.0
    notification_concurrency: int = 4
    report_timezone: str = "Asia/Seoul"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def email_configured(self) -> bool:
        """Return true when every SMTP setting needed to send mail is present."""
        return bool(self.smtp_username and self.smtp_password and self.boss_email)
