"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from pantry_pace.config import Settings
from pantry_pace.containers import AppContainer
from pantry_pace.domain.pantry import CookingHistoryEntry, PantryItem
from pantry_pace.domain.races import CompletedRace, UpcomingRace
from pantry_pace.domain.recipes import Recipe
from pantry_pace.domain.writes import PersistenceFailure, WriteAction, WriteOp
from pantry_pace.services.batch import WriteBatchCommitter
from pantry_pace.services.cooking import CookingService
from pantry_pace.services.pantry import PantryRepository, PantryService
from pantry_pace.services.races import RaceRepository, RaceService
from pantry_pace.services.recipes import RecipeClient, RecipeRepository, RecipeService


@dataclass
class InMemoryPantryRepository(PantryRepository):
    """In-memory pantry repository for tests."""

    items: dict[UUID, PantryItem] = field(default_factory=dict)
    owners: dict[UUID, UUID] = field(default_factory=dict)

    def add(self, user_id: UUID, name: str, quantity: float, unit: str = "") -> PantryItem:
        return self.create_item(user_id, name, quantity, unit)

    def list_items(self, user_id: UUID) -> list[PantryItem]:
        return [
            item for item_id, item in self.items.items() if self.owners[item_id] == user_id
        ]

    def create_item(
        self, user_id: UUID, name: str, quantity: float, unit: str
    ) -> PantryItem:
        item = PantryItem(id=uuid4(), name=name, quantity=quantity, unit=unit)
        self.items[item.id] = item
        self.owners[item.id] = user_id
        return item

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> PantryItem:
        if self.owners.get(item_id) != user_id:
            raise LookupError(f"Pantry item {item_id} not found")
        current = self.items[item_id]
        updated = PantryItem(
            id=current.id,
            name=str(payload.get("name", current.name)),
            quantity=float(payload.get("quantity", current.quantity)),
            unit=str(payload.get("unit", current.unit)),
        )
        self.items[item_id] = updated
        return updated

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        if self.owners.get(item_id) != user_id:
            return
        self.items.pop(item_id, None)
        self.owners.pop(item_id, None)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory saved recipe and history repository for tests."""

    saved: dict[UUID, list[Recipe]] = field(default_factory=dict)
    history: dict[UUID, list[CookingHistoryEntry]] = field(default_factory=dict)

    def list_saved_recipes(self, user_id: UUID) -> list[Recipe]:
        return list(self.saved.get(user_id, []))

    def save_recipe(self, user_id: UUID, recipe: Recipe) -> None:
        self.saved.setdefault(user_id, []).append(recipe)

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        self.saved[user_id] = [
            recipe for recipe in self.saved.get(user_id, []) if recipe.id != recipe_id
        ]

    def list_history(self, user_id: UUID, limit: int) -> list[CookingHistoryEntry]:
        entries = sorted(
            self.history.get(user_id, []),
            key=lambda entry: entry.cooked_at,
            reverse=True,
        )
        return entries[:limit]


@dataclass
class InMemoryRaceRepository(RaceRepository):
    """In-memory race repository for tests."""

    completed: dict[UUID, list[CompletedRace]] = field(default_factory=dict)
    upcoming: dict[UUID, list[UpcomingRace]] = field(default_factory=dict)

    def list_completed_races(self, user_id: UUID) -> list[CompletedRace]:
        return sorted(
            self.completed.get(user_id, []),
            key=lambda race: race.date or date.min,
            reverse=True,
        )

    def create_completed_race(
        self, user_id: UUID, payload: dict[str, object]
    ) -> CompletedRace:
        race = CompletedRace(
            id=UUID(str(payload["id"])) if payload.get("id") else uuid4(),
            name=str(payload["name"]),
            distance=str(payload["distance"]),
            time=str(payload["time"]),
            date=date.fromisoformat(str(payload["date"])) if payload.get("date") else None,
            notes=str(payload.get("notes", "")),
            link=str(payload.get("link", "")),
        )
        self.completed.setdefault(user_id, []).append(race)
        return race

    def update_completed_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> CompletedRace:
        races = self.completed.get(user_id, [])
        for index, race in enumerate(races):
            if race.id == race_id:
                races[index] = replace(race, **_coerce_date(payload))
                return races[index]
        raise LookupError(f"Completed race {race_id} not found")

    def delete_completed_race(self, user_id: UUID, race_id: UUID) -> None:
        self.completed[user_id] = [
            race for race in self.completed.get(user_id, []) if race.id != race_id
        ]

    def list_upcoming_races(self, user_id: UUID) -> list[UpcomingRace]:
        return sorted(
            self.upcoming.get(user_id, []), key=lambda race: race.date or date.max
        )

    def get_upcoming_race(self, user_id: UUID, race_id: UUID) -> UpcomingRace | None:
        for race in self.upcoming.get(user_id, []):
            if race.id == race_id:
                return race
        return None

    def create_upcoming_race(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UpcomingRace:
        race = UpcomingRace(
            id=uuid4(),
            name=str(payload["name"]),
            distance=str(payload["distance"]),
            date=date.fromisoformat(str(payload["date"])) if payload.get("date") else None,
            goal_time=str(payload.get("goal_time", "")),
            link=str(payload.get("link", "")),
            info=str(payload.get("info", "")),
        )
        self.upcoming.setdefault(user_id, []).append(race)
        return race

    def update_upcoming_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> UpcomingRace:
        races = self.upcoming.get(user_id, [])
        for index, race in enumerate(races):
            if race.id == race_id:
                races[index] = replace(race, **_coerce_date(payload))
                return races[index]
        raise LookupError(f"Upcoming race {race_id} not found")

    def delete_upcoming_race(self, user_id: UUID, race_id: UUID) -> None:
        self.upcoming[user_id] = [
            race for race in self.upcoming.get(user_id, []) if race.id != race_id
        ]


def _coerce_date(payload: dict[str, object]) -> dict[str, object]:
    values = dict(payload)
    if isinstance(values.get("date"), str):
        values["date"] = date.fromisoformat(values["date"])
    return values


@dataclass
class InMemoryWriteBatch(WriteBatchCommitter):
    """Applies batches to the in-memory repositories, all or nothing."""

    pantry: InMemoryPantryRepository
    recipes: InMemoryRecipeRepository
    races: InMemoryRaceRepository
    fail: bool = False
    commits: list[list[WriteAction]] = field(default_factory=list)

    def commit(self, user_id: UUID, actions: list[WriteAction]) -> None:
        if self.fail:
            raise PersistenceFailure("batch rejected")
        self.commits.append(actions)
        for action in actions:
            self._apply(user_id, action)

    def _apply(self, user_id: UUID, action: WriteAction) -> None:
        if action.table == "pantry_items":
            item_id = UUID(str(action.id))
            if action.op is WriteOp.DELETE:
                self.pantry.delete_item(user_id, item_id)
            else:
                self.pantry.update_item(user_id, item_id, action.fields)
        elif action.table == "cooking_history":
            fields = action.fields
            self.recipes.history.setdefault(user_id, []).append(
                CookingHistoryEntry(
                    id=UUID(str(fields["id"])),
                    recipe_id=UUID(str(fields["recipe_id"])),
                    recipe_name=str(fields["recipe_name"]),
                    cooked_at=datetime.fromisoformat(str(fields["cooked_at"])),
                    ingredients=list(fields["ingredients"]),
                )
            )
        elif action.table == "completed_races":
            self.races.create_completed_race(user_id, action.fields)
        elif action.table == "upcoming_races":
            self.races.delete_upcoming_race(user_id, UUID(str(action.id)))


@dataclass
class FakeRecipeClient(RecipeClient):
    """Fake recipe client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "recipes": [
                {
                    "name": "Pancakes",
                    "description": "Fluffy breakfast pancakes",
                    "ingredients": [
                        {"name": "flour", "quantity": 1, "unit": "cup"},
                        {"name": "milk", "quantity": 250, "unit": "ml"},
                        {"name": "eggs", "quantity": 2, "unit": ""},
                    ],
                    "instructions": ["Whisk", "Fry"],
                }
            ]
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service.key.signature",
        api_token="api-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def pantry_repository() -> InMemoryPantryRepository:
    return InMemoryPantryRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def race_repository() -> InMemoryRaceRepository:
    return InMemoryRaceRepository()


@pytest.fixture
def write_batch(
    pantry_repository: InMemoryPantryRepository,
    recipe_repository: InMemoryRecipeRepository,
    race_repository: InMemoryRaceRepository,
) -> InMemoryWriteBatch:
    return InMemoryWriteBatch(
        pantry=pantry_repository, recipes=recipe_repository, races=race_repository
    )


@pytest.fixture
def recipe_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    pantry_repository: InMemoryPantryRepository,
    recipe_repository: InMemoryRecipeRepository,
    race_repository: InMemoryRaceRepository,
    write_batch: InMemoryWriteBatch,
    recipe_client: FakeRecipeClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        pantry_service=PantryService(pantry_repository),
        cooking_service=CookingService(
            pantry_repository=pantry_repository, committer=write_batch
        ),
        recipe_service=RecipeService(
            client=recipe_client,
            repository=recipe_repository,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        race_service=RaceService(repository=race_repository, committer=write_batch),
        close_resources=close_resources,
    )
