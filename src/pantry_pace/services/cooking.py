"""Cooking a recipe against the pantry as one atomic write."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from pantry_pace.domain.pantry import (
    ConsumptionKind,
    ConsumptionPlan,
    CookingHistoryEntry,
    CookOutcome,
    SufficiencyOk,
    UnitPolicy,
)
from pantry_pace.domain.recipes import Recipe
from pantry_pace.domain.writes import PersistenceFailure, WriteAction
from pantry_pace.services.batch import WriteBatchCommitter
from pantry_pace.services.matching import IngredientMatcher, exact_then_substring
from pantry_pace.services.pantry import (
    DEFAULT_EPSILON,
    PantryRepository,
    check_sufficiency,
    plan_consumption,
)

logger = logging.getLogger(__name__)

PANTRY_TABLE = "pantry_items"
HISTORY_TABLE = "cooking_history"


@dataclass
class CookingService:
    """Checks, plans and commits the pantry changes for a cooked recipe."""

    pantry_repository: PantryRepository
    committer: WriteBatchCommitter
    matcher: IngredientMatcher = exact_then_substring
    unit_policy: UnitPolicy = UnitPolicy.RAW_QUANTITY
    epsilon: float = DEFAULT_EPSILON

    def cook(self, user_id: UUID, recipe: Recipe) -> CookOutcome:
        """Consume the recipe's ingredients and record the history entry.

        Nothing is written when the pantry cannot cover the recipe. A
        rejected batch raises PersistenceFailure and is not retried; the
        caller should re-check against a fresh snapshot first.
        """
        pantry = self.pantry_repository.list_items(user_id)
        result = check_sufficiency(
            pantry,
            recipe.ingredients,
            matcher=self.matcher,
            unit_policy=self.unit_policy,
        )
        if not isinstance(result, SufficiencyOk):
            logger.info("Cannot cook %s for %s: %s", recipe.name, user_id, result)
            return CookOutcome(result=result)

        plan = plan_consumption(
            pantry,
            recipe.ingredients,
            matcher=self.matcher,
            unit_policy=self.unit_policy,
            epsilon=self.epsilon,
        )
        history = CookingHistoryEntry(
            id=uuid4(),
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            cooked_at=datetime.now(tz=UTC),
            ingredients=[
                ingredient.model_dump() for ingredient in recipe.ingredients
            ],
        )
        actions = build_cook_batch(user_id, plan, history)
        try:
            self.committer.commit(user_id, actions)
        except PersistenceFailure:
            logger.exception("Cook batch rejected for recipe %s", recipe.id)
            raise
        logger.info(
            "Cooked %s: %d pantry updates, %d removals",
            recipe.name,
            len(plan.actions) - len(plan.deleted_ids),
            len(plan.deleted_ids),
        )
        return CookOutcome(result=result, plan=plan, history=history)


def build_cook_batch(
    user_id: UUID, plan: ConsumptionPlan, history: CookingHistoryEntry
) -> list[WriteAction]:
    """Translate a consumption plan and history entry into batch writes."""
    actions = []
    for action in plan.actions:
        if action.kind is ConsumptionKind.DELETE:
            actions.append(WriteAction.delete(PANTRY_TABLE, str(action.item_id)))
        else:
            actions.append(
                WriteAction.upsert(
                    PANTRY_TABLE, str(action.item_id), {"quantity": action.quantity}
                )
            )
    actions.append(
        WriteAction.create(
            HISTORY_TABLE,
            {
                "id": str(history.id),
                "user_id": str(user_id),
                "recipe_id": str(history.recipe_id),
                "recipe_name": history.recipe_name,
                "cooked_at": history.cooked_at.isoformat(),
                "ingredients": history.ingredients,
            },
        )
    )
    return actions
