"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pantry_pace.adapters.openai_recipe_client import OpenAIRecipeClient
from pantry_pace.adapters.supabase_pantry_repository import SupabasePantryRepository
from pantry_pace.adapters.supabase_race_repository import SupabaseRaceRepository
from pantry_pace.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from pantry_pace.adapters.supabase_write_batch import SupabaseWriteBatch
from pantry_pace.config import Settings
from pantry_pace.domain.pantry import UnitPolicy
from pantry_pace.services.cooking import CookingService
from pantry_pace.services.pantry import PantryService
from pantry_pace.services.races import RaceService
from pantry_pace.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    pantry_service: PantryService
    cooking_service: CookingService
    recipe_service: RecipeService
    race_service: RaceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    pantry_repository = SupabasePantryRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    race_repository = SupabaseRaceRepository(supabase_client)
    committer = SupabaseWriteBatch(supabase_client)
    unit_policy = UnitPolicy(resolved_settings.unit_policy)

    pantry_service = PantryService(pantry_repository, unit_policy=unit_policy)
    cooking_service = CookingService(
        pantry_repository=pantry_repository,
        committer=committer,
        unit_policy=unit_policy,
        epsilon=resolved_settings.pantry_epsilon,
    )
    recipe_client = OpenAIRecipeClient.create(resolved_settings.openai_api_key)
    recipe_service = RecipeService(
        client=recipe_client,
        repository=recipe_repository,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    race_service = RaceService(repository=race_repository, committer=committer)

    async def close_resources() -> None:
        await recipe_client.close()

    return AppContainer(
        settings=resolved_settings,
        pantry_service=pantry_service,
        cooking_service=cooking_service,
        recipe_service=recipe_service,
        race_service=race_service,
        close_resources=close_resources,
    )
