"""Supabase repository for pantry items."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from pantry_pace.domain.pantry import PantryItem
from pantry_pace.services.pantry import PantryRepository

_COLUMNS = "id, name, quantity, unit"


@dataclass
class SupabasePantryRepository(PantryRepository):
    """Supabase implementation for pantry items."""

    client: Client

    def list_items(self, user_id: UUID) -> list[PantryItem]:
        """Return pantry items for a user."""
        response = (
            self.client.table("pantry_items")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("name", desc=False)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def create_item(
        self, user_id: UUID, name: str, quantity: float, unit: str
    ) -> PantryItem:
        """Create a pantry item row."""
        response = (
            self.client.table("pantry_items")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "quantity": quantity,
                    "unit": unit,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create pantry item")
        return _parse_item(response.data[0])

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> PantryItem:
        """Update a pantry item row owned by the user."""
        response = (
            self.client.table("pantry_items")
            .update(payload)
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise LookupError(f"Pantry item {item_id} not found")
        return _parse_item(response.data[0])

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete a pantry item row owned by the user."""
        self.client.table("pantry_items").delete().eq("id", str(item_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_item(row: dict[str, object]) -> PantryItem:
    return PantryItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        quantity=float(row.get("quantity") or 0.0),
        unit=str(row.get("unit") or ""),
    )
