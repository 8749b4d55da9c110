"""Tests for the cooking service."""

from uuid import uuid4

import pytest

from pantry_pace.domain.pantry import (
    ConsumptionKind,
    InsufficientIngredient,
    MissingIngredient,
    SufficiencyOk,
)
from pantry_pace.domain.recipes import Recipe, RecipeIngredient
from pantry_pace.domain.writes import PersistenceFailure, WriteOp
from pantry_pace.services.cooking import CookingService
from tests.conftest import (
    InMemoryPantryRepository,
    InMemoryRecipeRepository,
    InMemoryWriteBatch,
)


def _recipe(*ingredients: tuple[str, float, str]) -> Recipe:
    return Recipe(
        name="Shortbread",
        ingredients=[
            RecipeIngredient(name=name, quantity=quantity, unit=unit)
            for name, quantity, unit in ingredients
        ],
    )


def test_cook_decrements_and_records_history(
    pantry_repository: InMemoryPantryRepository,
    recipe_repository: InMemoryRecipeRepository,
    write_batch: InMemoryWriteBatch,
) -> None:
    user_id = uuid4()
    flour = pantry_repository.add(user_id, "flour", 500, "g")
    butter = pantry_repository.add(user_id, "butter", 1, "stick")
    salt = pantry_repository.add(user_id, "salt", 100, "g")
    service = CookingService(pantry_repository=pantry_repository, committer=write_batch)

    outcome = service.cook(
        user_id, _recipe(("flour", 2, "cups"), ("Butter", 113.398, "g"))
    )

    assert outcome.cooked
    assert outcome.result == SufficiencyOk()
    assert pantry_repository.items[flour.id].quantity == pytest.approx(26.824, abs=0.01)
    assert butter.id not in pantry_repository.items
    assert pantry_repository.items[salt.id].quantity == 100
    history = recipe_repository.list_history(user_id, 10)
    assert [entry.recipe_name for entry in history] == ["Shortbread"]
    assert outcome.history is not None
    assert history[0].id == outcome.history.id


def test_cook_commits_single_batch(
    pantry_repository: InMemoryPantryRepository,
    write_batch: InMemoryWriteBatch,
) -> None:
    user_id = uuid4()
    pantry_repository.add(user_id, "rice", 1, "kg")
    pantry_repository.add(user_id, "water", 500, "ml")
    service = CookingService(pantry_repository=pantry_repository, committer=write_batch)

    service.cook(user_id, _recipe(("rice", 200, "g"), ("water", 500, "ml")))

    assert len(write_batch.commits) == 1
    ops = [(action.table, action.op) for action in write_batch.commits[0]]
    assert ops == [
        ("pantry_items", WriteOp.UPSERT),
        ("pantry_items", WriteOp.DELETE),
        ("cooking_history", WriteOp.CREATE),
    ]


def test_insufficient_pantry_writes_nothing(
    pantry_repository: InMemoryPantryRepository,
    recipe_repository: InMemoryRecipeRepository,
    write_batch: InMemoryWriteBatch,
) -> None:
    user_id = uuid4()
    sugar = pantry_repository.add(user_id, "sugar", 100, "g")
    service = CookingService(pantry_repository=pantry_repository, committer=write_batch)

    outcome = service.cook(user_id, _recipe(("sugar", 1, "kg")))

    assert not outcome.cooked
    assert isinstance(outcome.result, InsufficientIngredient)
    assert outcome.plan is None
    assert write_batch.commits == []
    assert pantry_repository.items[sugar.id].quantity == 100
    assert recipe_repository.list_history(user_id, 10) == []


def test_missing_ingredient_writes_nothing(
    pantry_repository: InMemoryPantryRepository,
    write_batch: InMemoryWriteBatch,
) -> None:
    user_id = uuid4()
    pantry_repository.add(user_id, "flour", 500, "g")
    service = CookingService(pantry_repository=pantry_repository, committer=write_batch)

    outcome = service.cook(user_id, _recipe(("flour", 100, "g"), ("yeast", 7, "g")))

    assert outcome.result == MissingIngredient(name="yeast")
    assert write_batch.commits == []


def test_rejected_batch_propagates_and_leaves_pantry(
    pantry_repository: InMemoryPantryRepository,
    recipe_repository: InMemoryRecipeRepository,
    write_batch: InMemoryWriteBatch,
) -> None:
    user_id = uuid4()
    flour = pantry_repository.add(user_id, "flour", 500, "g")
    write_batch.fail = True
    service = CookingService(pantry_repository=pantry_repository, committer=write_batch)

    with pytest.raises(PersistenceFailure):
        service.cook(user_id, _recipe(("flour", 100, "g")))

    assert pantry_repository.items[flour.id].quantity == 500
    assert recipe_repository.list_history(user_id, 10) == []


def test_plan_returned_with_outcome(
    pantry_repository: InMemoryPantryRepository,
    write_batch: InMemoryWriteBatch,
) -> None:
    user_id = uuid4()
    eggs = pantry_repository.add(user_id, "eggs", 2, "")
    service = CookingService(pantry_repository=pantry_repository, committer=write_batch)

    outcome = service.cook(user_id, _recipe(("egg", 2, "")))

    assert outcome.plan is not None
    assert outcome.plan.actions[0].item_id == eggs.id
    assert outcome.plan.actions[0].kind is ConsumptionKind.DELETE
