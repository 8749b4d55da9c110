"""Supabase repository for saved recipes and cooking history."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from pantry_pace.domain.pantry import CookingHistoryEntry
from pantry_pace.domain.recipes import Recipe
from pantry_pace.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes."""

    client: Client

    def list_saved_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return saved recipes for a user."""
        response = (
            self.client.table("saved_recipes")
            .select("recipe_id, recipe_json")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def save_recipe(self, user_id: UUID, recipe: Recipe) -> None:
        """Insert a saved recipe row."""
        self.client.table("saved_recipes").insert(
            {
                "user_id": str(user_id),
                "recipe_id": str(recipe.id),
                "name": recipe.name,
                "recipe_json": recipe.model_dump(mode="json"),
            }
        ).execute()

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a saved recipe row."""
        self.client.table("saved_recipes").delete().eq("user_id", str(user_id)).eq(
            "recipe_id", str(recipe_id)
        ).execute()

    def list_history(self, user_id: UUID, limit: int) -> list[CookingHistoryEntry]:
        """Return recent cooking history rows."""
        response = (
            self.client.table("cooking_history")
            .select("id, recipe_id, recipe_name, cooked_at, ingredients")
            .eq("user_id", str(user_id))
            .order("cooked_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_history(row) for row in response.data or []]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    payload = dict(row.get("recipe_json") or {})
    payload["id"] = row.get("recipe_id", payload.get("id"))
    return Recipe.model_validate(payload)


def _parse_history(row: dict[str, object]) -> CookingHistoryEntry:
    ingredients = row.get("ingredients")
    return CookingHistoryEntry(
        id=UUID(str(row["id"])),
        recipe_id=UUID(str(row["recipe_id"])),
        recipe_name=str(row.get("recipe_name") or ""),
        cooked_at=datetime.fromisoformat(str(row["cooked_at"])),
        ingredients=ingredients if isinstance(ingredients, list) else [],
    )
