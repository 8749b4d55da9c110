"""Pantry, recipe and cooking endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from pantry_pace.api.auth import require_token
from pantry_pace.api.models import (
    CookRequest,
    PantryItemIn,
    PantryItemPatch,
    SufficiencyRequest,
    SuggestRequest,
)
from pantry_pace.domain.pantry import (
    MissingIngredient,
    SufficiencyOk,
    SufficiencyResult,
)
from pantry_pace.domain.recipes import Recipe

if TYPE_CHECKING:
    from pantry_pace.containers import AppContainer

router = APIRouter(
    prefix="/users/{user_id}",
    tags=["pantry"],
    dependencies=[Depends(require_token)],
)


@router.get("/pantry")
async def list_pantry(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's pantry."""
    container: AppContainer = request.app.state.container
    items = container.pantry_service.list_items(user_id)
    return {"items": [asdict(item) for item in items]}


@router.post("/pantry", status_code=status.HTTP_201_CREATED)
async def add_pantry_item(
    user_id: UUID, body: PantryItemIn, request: Request
) -> dict[str, object]:
    """Add an item to the pantry."""
    container: AppContainer = request.app.state.container
    item = container.pantry_service.add_item(
        user_id, body.name, body.quantity, body.unit
    )
    return asdict(item)


@router.patch("/pantry/{item_id}")
async def update_pantry_item(
    user_id: UUID, item_id: UUID, body: PantryItemPatch, request: Request
) -> dict[str, object]:
    """Edit a pantry item."""
    container: AppContainer = request.app.state.container
    item = container.pantry_service.update_item(
        user_id, item_id, body.model_dump(exclude_none=True)
    )
    return asdict(item)


@router.delete("/pantry/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pantry_item(
    user_id: UUID, item_id: UUID, request: Request
) -> Response:
    """Remove a pantry item."""
    container: AppContainer = request.app.state.container
    container.pantry_service.delete_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/pantry/check")
async def check_pantry(
    user_id: UUID, body: SufficiencyRequest, request: Request
) -> dict[str, object]:
    """Check whether the pantry covers a list of ingredients."""
    container: AppContainer = request.app.state.container
    result = container.pantry_service.check(user_id, body.ingredients)
    return sufficiency_payload(result)


@router.post("/recipes/suggest")
async def suggest_recipes(
    user_id: UUID, body: SuggestRequest, request: Request
) -> dict[str, object]:
    """Generate recipes from the current pantry."""
    container: AppContainer = request.app.state.container
    pantry = container.pantry_service.list_items(user_id)
    recipes = await container.recipe_service.suggest(
        pantry, body.preferences, body.count
    )
    return {"recipes": [recipe.model_dump(mode="json") for recipe in recipes]}


@router.post("/recipes/cook")
async def cook_recipe(
    user_id: UUID, body: CookRequest, request: Request
) -> JSONResponse:
    """Consume a recipe's ingredients from the pantry."""
    container: AppContainer = request.app.state.container
    outcome = container.cooking_service.cook(user_id, body.recipe)
    if not outcome.cooked:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=sufficiency_payload(outcome.result),
        )
    actions = outcome.plan.actions if outcome.plan else []
    return JSONResponse(
        content={
            "status": "cooked",
            "history_id": str(outcome.history.id) if outcome.history else None,
            "actions": [
                {
                    "item_id": str(action.item_id),
                    "name": action.name,
                    "action": action.kind.value,
                    "quantity": action.quantity,
                }
                for action in actions
            ],
        }
    )


@router.get("/recipes/favorites")
async def list_favorites(user_id: UUID, request: Request) -> dict[str, object]:
    """Return saved recipes."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_service.list_favorites(user_id)
    return {"recipes": [recipe.model_dump(mode="json") for recipe in recipes]}


@router.post("/recipes/favorites/toggle")
async def toggle_favorite(
    user_id: UUID, recipe: Recipe, request: Request
) -> dict[str, object]:
    """Save or unsave a recipe."""
    container: AppContainer = request.app.state.container
    favorited = container.recipe_service.toggle_favorite(user_id, recipe)
    return {"recipe_id": str(recipe.id), "favorite": favorited}


@router.get("/recipes/history")
async def cooking_history(
    user_id: UUID, request: Request, limit: int = 20
) -> dict[str, object]:
    """Return recently cooked recipes."""
    container: AppContainer = request.app.state.container
    entries = container.recipe_service.list_history(user_id, limit)
    return {"history": [asdict(entry) for entry in entries]}


def sufficiency_payload(result: SufficiencyResult) -> dict[str, object]:
    """Describe a sufficiency result for API clients."""
    if isinstance(result, SufficiencyOk):
        return {"status": "ok"}
    if isinstance(result, MissingIngredient):
        return {"status": "missing", "name": result.name}
    return {
        "status": _STATUS_NAMES[type(result).__name__],
        "name": result.name,
        "needed": str(result.needed),
        "available": str(result.available),
    }


_STATUS_NAMES = {
    "InsufficientIngredient": "insufficient",
    "IncompatibleUnits": "incompatible",
}
