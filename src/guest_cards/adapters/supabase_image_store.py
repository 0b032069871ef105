"""Supabase Storage gateway for rendered guest cards."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import Client

from guest_cards.services.guests import ImageStore


@dataclass
class SupabaseImageStore(ImageStore):
    """Uploads card images to a bucket and issues signed read URLs.

    Signed URLs are never refreshed; a stored URL stops working once
    signed_url_ttl has passed.
    """

    client: Client
    bucket: str
    signed_url_ttl: timedelta = timedelta(days=365)

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload bytes without overwriting and return a signed URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path=path,
            file=data,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        signed = bucket.create_signed_url(
            path, int(self.signed_url_ttl.total_seconds())
        )
        url = signed.get("signedUrl") or signed.get("signedURL")
        if not url:
            raise RuntimeError(f"Supabase returned no signed URL for {path}")
        return str(url)
