"""Request and response models for the HTTP API."""

from datetime import date as Date  # noqa: N812

from pydantic import BaseModel, Field

from pantry_pace.domain.recipes import Recipe, RecipeIngredient


class PantryItemIn(BaseModel):
    """Body for creating a pantry item."""

    name: str = Field(min_length=1)
    quantity: float = Field(ge=0.0)
    unit: str = ""


class PantryItemPatch(BaseModel):
    """Body for editing a pantry item."""

    name: str | None = None
    quantity: float | None = Field(default=None, ge=0.0)
    unit: str | None = None


class SufficiencyRequest(BaseModel):
    """Ingredients to check against the pantry."""

    ingredients: list[RecipeIngredient]


class SuggestRequest(BaseModel):
    """Options for recipe suggestions."""

    preferences: str | None = None
    count: int = Field(default=3, ge=1, le=10)


class CookRequest(BaseModel):
    """Recipe to cook from the pantry."""

    recipe: Recipe


class CompletedRaceIn(BaseModel):
    """Body for logging a finished race."""

    name: str = Field(min_length=1)
    distance: str = Field(min_length=1)
    time: str = Field(min_length=1)
    date: Date
    notes: str = ""
    link: str = ""


class CompletedRacePatch(BaseModel):
    """Body for editing a finished race."""

    name: str | None = None
    distance: str | None = None
    time: str | None = None
    date: Date | None = None
    notes: str | None = None
    link: str | None = None


class UpcomingRaceIn(BaseModel):
    """Body for scheduling a race."""

    name: str = Field(min_length=1)
    distance: str = Field(min_length=1)
    date: Date
    goal_time: str = ""
    link: str = ""
    info: str = ""


class UpcomingRacePatch(BaseModel):
    """Body for editing a scheduled race."""

    name: str | None = None
    distance: str | None = None
    date: Date | None = None
    goal_time: str | None = None
    link: str | None = None
    info: str | None = None


class CompleteRaceRequest(BaseModel):
    """Finish time for an upcoming race."""

    time: str = Field(min_length=1)
    notes: str = ""
