"""Supabase Storage adapter for report photos."""

from dataclasses import dataclass

from supabase import Client

from shift_report.domain.errors import UploadError
from shift_report.services.uploads import BlobStorage


@dataclass
class SupabaseBlobStorage(BlobStorage):
    """Stores photos in a Supabase Storage bucket."""

    client: Client
    bucket: str
    signed_url_ttl_seconds: int = 0

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        """Upload bytes to the bucket under the key."""
        self.client.storage.from_(self.bucket).upload(
            key, data, {"content-type": content_type}
        )

    def resolve_url(self, key: str) -> str:
        """Return a public URL, or a signed URL when a TTL is configured."""
        bucket = self.client.storage.from_(self.bucket)
        if self.signed_url_ttl_seconds <= 0:
            return bucket.get_public_url(key)
        response = bucket.create_signed_url(key, self.signed_url_ttl_seconds)
        url = response.get("signedURL") or response.get("signedUrl")
        if not url:
            raise UploadError(f"Failed to resolve URL for {key}")
        return str(url)

    def delete(self, keys: list[str]) -> None:
        """Remove objects from the bucket."""
        self.client.storage.from_(self.bucket).remove(keys)
