"""Guest card workflow: render, upload, record, list, delete, re-download."""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from guest_cards.domain.guests import GuestRecord
from guest_cards.services.compositor import CardCompositor

logger = logging.getLogger(__name__)

CARD_CONTENT_TYPE = "image/jpeg"


class MissingGuestFieldsError(ValueError):
    """Raised when a card request lacks a name or number."""


class InvalidGuestIdError(ValueError):
    """Raised when a guest id is not a well-formed store identifier."""


class GuestNotFoundError(LookupError):
    """Raised when no guest record exists for a well-formed id."""


class ImageFetchError(RuntimeError):
    """Raised when a stored card image cannot be downloaded."""


class GuestRepository(Protocol):
    """Persistence interface for guest records."""

    def create(self, name: str, number: str, image_path: str) -> GuestRecord:
        """Create a guest record and return it with its id."""

    def list_all(self) -> list[GuestRecord]:
        """Return every guest record."""

    def get(self, guest_id: UUID) -> GuestRecord | None:
        """Return a guest record by id, if present."""

    def delete(self, guest_id: UUID) -> GuestRecord | None:
        """Delete a guest record and return it, if it existed."""

    def ping(self) -> None:
        """Raise if the store is unreachable."""


class ImageStore(Protocol):
    """Object storage for rendered cards."""

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes at path and return a signed read URL."""


class ImageFetcher(Protocol):
    """Downloads previously stored card images."""

    async def fetch(self, url: str) -> bytes:
        """Return the bytes behind a signed URL."""


def parse_guest_id(raw: str) -> UUID:
    """Parse a guest id from a path parameter."""
    try:
        return UUID(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidGuestIdError(raw) from exc


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def build_object_path(prefix: str, now: datetime | None = None) -> str:
    """Return a storage path namespaced by prefix and upload time.

    The random suffix keeps two uploads in the same millisecond apart.
    """
    moment = now or _utcnow()
    millis = int(moment.timestamp() * 1000)
    return f"{prefix}/{millis}_{secrets.token_hex(3)}_edited-image.jpg"


@dataclass
class GuestService:
    """Application service behind the card endpoints."""

    repository: GuestRepository
    image_store: ImageStore
    image_fetcher: ImageFetcher
    compositor: CardCompositor
    storage_prefix: str = "hedayat"
    clock: Callable[[], datetime] = _utcnow

    def create_card(
        self, name: str | None, number: str | None, two_names: bool = False
    ) -> GuestRecord:
        """Render a card for the guest, upload it and store the record.

        A failed record write after a successful upload leaves the uploaded
        object without a record.
        """
        if not name or not number:
            raise MissingGuestFieldsError("Name and number are required")
        image = self.compositor.compose(name, two_names=two_names)
        path = build_object_path(self.storage_prefix, self.clock())
        image_url = self.image_store.upload(path, image, CARD_CONTENT_TYPE)
        logger.info("Uploaded guest card", extra={"path": path})
        return self.repository.create(name=name, number=number, image_path=image_url)

    def list_guests(self) -> list[GuestRecord]:
        """Return all guest records."""
        return self.repository.list_all()

    def delete_guest(self, raw_id: str) -> GuestRecord:
        """Delete a guest record by id and return it."""
        try:
            guest_id = parse_guest_id(raw_id)
        except InvalidGuestIdError as exc:
            # Malformed ids can never be stored.
            raise GuestNotFoundError(raw_id) from exc
        deleted = self.repository.delete(guest_id)
        if deleted is None:
            raise GuestNotFoundError(raw_id)
        return deleted

    async def get_guest_image(self, raw_id: str) -> tuple[GuestRecord, bytes]:
        """Return a guest record together with its stored card bytes."""
        guest_id = parse_guest_id(raw_id)
        record = self.repository.get(guest_id)
        if record is None:
            raise GuestNotFoundError(raw_id)
        try:
            content = await self.image_fetcher.fetch(record.image_path)
        except Exception as exc:
            raise ImageFetchError(f"Failed to fetch image for {raw_id}") from exc
        return record, content
