"""Recipe suggestions and saved favorites."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pantry_pace.domain.pantry import CookingHistoryEntry, PantryItem
from pantry_pace.domain.recipes import Recipe, RecipeSuggestions

logger = logging.getLogger(__name__)

_INGREDIENT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "quantity": {"type": "number", "minimum": 0},
        "unit": {"type": "string"},
    },
    "required": ["name", "quantity", "unit"],
    "additionalProperties": False,
}

RECIPE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recipes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "ingredients": {"type": "array", "items": _INGREDIENT_SCHEMA},
                    "instructions": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["name", "description", "ingredients", "instructions"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["recipes"],
    "additionalProperties": False,
}


class RecipeClient(Protocol):
    """Interface for LLM recipe generation."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured recipe data."""


class RecipeRepository(Protocol):
    """Persistence interface for saved recipes and cooking history."""

    def list_saved_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return the user's favorited recipes."""

    def save_recipe(self, user_id: UUID, recipe: Recipe) -> None:
        """Persist a favorited recipe."""

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Remove a favorited recipe."""

    def list_history(self, user_id: UUID, limit: int) -> list[CookingHistoryEntry]:
        """Return recently cooked recipes, newest first."""


@dataclass
class RecipeService:
    """Service that prompts for recipes and manages favorites."""

    client: RecipeClient
    repository: RecipeRepository
    model: str
    reasoning_effort: str | None
    store: bool

    async def suggest(
        self,
        pantry: Sequence[PantryItem],
        preferences: str | None = None,
        count: int = 3,
    ) -> list[Recipe]:
        """Ask the model for recipes that use what is in the pantry."""
        prompt = build_prompt(pantry, preferences, count)
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            schema=RECIPE_SCHEMA,
            prompt=prompt,
        )
        suggestions = RecipeSuggestions.model_validate(raw)
        logger.info("Generated %d recipe suggestions", len(suggestions.recipes))
        return suggestions.recipes[:count]

    def list_favorites(self, user_id: UUID) -> list[Recipe]:
        """Return saved recipes."""
        return self.repository.list_saved_recipes(user_id)

    def toggle_favorite(self, user_id: UUID, recipe: Recipe) -> bool:
        """Save or unsave a recipe and return whether it is now a favorite."""
        saved_ids = {saved.id for saved in self.repository.list_saved_recipes(user_id)}
        if recipe.id in saved_ids:
            self.repository.delete_recipe(user_id, recipe.id)
            return False
        self.repository.save_recipe(user_id, recipe)
        return True

    def list_history(self, user_id: UUID, limit: int = 20) -> list[CookingHistoryEntry]:
        """Return recent cooking history."""
        return self.repository.list_history(user_id, limit)


def build_prompt(
    pantry: Sequence[PantryItem], preferences: str | None, count: int
) -> str:
    """Describe the pantry contents for the recipe prompt."""
    if pantry:
        stock = "\n".join(f"- {item.name}: {item.amount}" for item in pantry)
    else:
        stock = "- (the pantry is empty)"
    prompt = (
        f"Suggest {count} recipes that can be cooked mostly from this pantry.\n"
        f"Pantry:\n{stock}\n"
        "Use the pantry item names exactly for ingredients taken from the pantry. "
        "Give every ingredient a numeric quantity and a unit such as g, ml, cup, "
        "tbsp, tsp or an empty string for countable items."
    )
    if preferences:
        prompt += f"\nPreferences: {preferences.strip()}"
    return prompt
