"""Photo upload to blob storage."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from shift_report.domain.errors import UploadError
from shift_report.services.images import NormalizedImage

logger = logging.getLogger(__name__)


class BlobStorage(Protocol):
    """Key-addressed object storage."""

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        """Store bytes under a key."""

    def resolve_url(self, key: str) -> str:
        """Return a retrievable URL for a stored key."""

    def delete(self, keys: list[str]) -> None:
        """Remove stored keys."""


def photo_key(reporter_uid: str, submitted_at: datetime, index: int) -> str:
    """Return the storage key for one photo of a submission."""
    epoch_ms = int(submitted_at.timestamp() * 1000)
    return f"reports/{reporter_uid}/{epoch_ms}_{index}.jpg"


@dataclass
class PhotoUploader:
    """Uploads normalized photos and resolves their URLs."""

    storage: BlobStorage

    def upload(self, key: str, image: NormalizedImage) -> None:
        """Store a photo under its key."""
        try:
            self.storage.upload(key, image.data, image.content_type)
        except UploadError:
            raise
        except Exception as exc:
            raise UploadError(f"Failed to upload {key}: {exc}") from exc

    def url_for(self, key: str) -> str:
        """Return the URL of a stored photo."""
        try:
            return self.storage.resolve_url(key)
        except UploadError:
            raise
        except Exception as exc:
            raise UploadError(f"Failed to resolve URL for {key}: {exc}") from exc

    def discard(self, keys: list[str]) -> None:
        """Best-effort removal of photos from an aborted submission."""
        if not keys:
            return
        try:
            self.storage.delete(keys)
        except Exception:
            logger.exception("Failed to remove orphaned photos", extra={"keys": keys})
