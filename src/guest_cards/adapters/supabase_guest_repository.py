"""Supabase-backed guest record repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from guest_cards.domain.guests import GuestRecord
from guest_cards.services.guests import GuestRepository

_COLUMNS = "id, name, number, image_path"


@dataclass
class SupabaseGuestRepository(GuestRepository):
    """Supabase implementation for guest card records."""

    client: Client
    table_name: str = "cards"

    def create(self, name: str, number: str, image_path: str) -> GuestRecord:
        """Insert a guest row and return it."""
        response = (
            self.client.table(self.table_name)
            .insert({"name": name, "number": number, "image_path": image_path})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create guest record")
        return _parse_guest(response.data[0])

    def list_all(self) -> list[GuestRecord]:
        """Return every guest row."""
        response = self.client.table(self.table_name).select(_COLUMNS).execute()
        return [_parse_guest(row) for row in response.data or []]

    def get(self, guest_id: UUID) -> GuestRecord | None:
        """Return a guest row by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(guest_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_guest(response.data[0])

    def delete(self, guest_id: UUID) -> GuestRecord | None:
        """Delete a guest row and return the removed row."""
        response = (
            self.client.table(self.table_name)
            .delete()
            .eq("id", str(guest_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_guest(response.data[0])

    def ping(self) -> None:
        """Run a one-row query to check the table is reachable."""
        self.client.table(self.table_name).select("id").limit(1).execute()


def _parse_guest(row: dict[str, object]) -> GuestRecord:
    return GuestRecord(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        number=str(row.get("number", "")),
        image_path=str(row.get("image_path", "")),
    )
