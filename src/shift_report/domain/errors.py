"""Error taxonomy for the report pipeline."""

from enum import Enum


class ShiftReportError(Exception):
    """Base class for report pipeline errors."""


class ValidationReason(Enum):
    """Why a report form was rejected."""

    MISSING_SUMMARY = "missing_summary"
    UNKNOWN_CHECKLIST_ITEM = "unknown_checklist_item"
    TOO_MANY_PHOTOS = "too_many_photos"


class ValidationError(ShiftReportError):
    """User-fixable form error raised before any side effect."""

    def __init__(self, reason: ValidationReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message


class ImageDecodeError(ShiftReportError):
    """A captured photo could not be decoded."""


class UploadError(ShiftReportError):
    """A photo could not be written to blob storage."""


class StoreError(ShiftReportError):
    """The document store rejected a read or write."""


class ConfigError(ShiftReportError):
    """A notification channel is missing required configuration."""


class DeliveryError(ShiftReportError):
    """A notification channel rejected or failed a delivery."""


class RateLimitedError(ShiftReportError):
    """The request source exceeded its rate limit."""

    def __init__(self, key: str, retry_after: float) -> None:
        super().__init__(f"Rate limit exceeded for {key}")
        self.key = key
        self.retry_after = retry_after
