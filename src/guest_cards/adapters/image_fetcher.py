"""HTTP client for downloading stored card images."""

from dataclasses import dataclass

import httpx

from guest_cards.services.guests import ImageFetcher


@dataclass
class HttpxImageFetcher(ImageFetcher):
    """Image fetcher using httpx."""

    http_client: httpx.AsyncClient
    timeout: float = 20

    @classmethod
    def create(cls) -> "HttpxImageFetcher":
        """Create a fetcher with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def fetch(self, url: str) -> bytes:
        """Download the image behind a signed URL."""
        response = await self.http_client.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
