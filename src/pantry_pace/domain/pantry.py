"""Domain models for the pantry ledger."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from pantry_pace.domain.units import Quantity


@dataclass(frozen=True)
class PantryItem:
    """A stocked ingredient in a user's pantry."""

    id: UUID
    name: str
    quantity: float
    unit: str = ""

    @property
    def amount(self) -> Quantity:
        return Quantity(self.quantity, self.unit)


class UnitPolicy(str, Enum):
    """How to compare quantities whose units share no base unit."""

    RAW_QUANTITY = "raw_quantity"
    REJECT = "reject"


@dataclass(frozen=True)
class SufficiencyOk:
    """Every requirement is covered by the pantry."""


@dataclass(frozen=True)
class MissingIngredient:
    """No pantry item could be resolved for a requirement."""

    name: str


@dataclass(frozen=True)
class InsufficientIngredient:
    """A resolved pantry item does not cover the required amount."""

    name: str
    needed: Quantity
    available: Quantity


@dataclass(frozen=True)
class IncompatibleUnits:
    """Requirement and pantry item units cannot be compared."""

    name: str
    needed: Quantity
    available: Quantity


SufficiencyResult = (
    SufficiencyOk | MissingIngredient | InsufficientIngredient | IncompatibleUnits
)


class ConsumptionKind(str, Enum):
    """Action applied to a pantry item after cooking."""

    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ConsumptionAction:
    """Planned change for a single pantry item."""

    item_id: UUID
    name: str
    kind: ConsumptionKind
    quantity: float


@dataclass(frozen=True)
class ConsumptionPlan:
    """Pantry changes produced by cooking a recipe."""

    actions: list[ConsumptionAction]

    @property
    def deleted_ids(self) -> list[UUID]:
        return [
            action.item_id
            for action in self.actions
            if action.kind is ConsumptionKind.DELETE
        ]


@dataclass(frozen=True)
class CookingHistoryEntry:
    """Record of a cooked recipe."""

    id: UUID
    recipe_id: UUID
    recipe_name: str
    cooked_at: datetime
    ingredients: list[dict[str, object]]


@dataclass(frozen=True)
class CookOutcome:
    """Result of trying to cook a recipe from the pantry."""

    result: SufficiencyResult
    plan: ConsumptionPlan | None = None
    history: CookingHistoryEntry | None = None

    @property
    def cooked(self) -> bool:
        return isinstance(self.result, SufficiencyOk)
