"""Models for generated and saved recipes."""

from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class RecipeIngredient(BaseModel):
    """Ingredient requirement of a recipe."""

    name: str
    quantity: float = Field(ge=0.0)
    unit: str = ""


class Recipe(BaseModel):
    """A recipe suggestion or saved favorite."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str = ""
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


class RecipeSuggestions(BaseModel):
    """Structured output of recipe generation."""

    recipes: list[Recipe]
