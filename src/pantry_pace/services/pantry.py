"""Pantry sufficiency checks and consumption planning."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pantry_pace.domain.pantry import (
    ConsumptionAction,
    ConsumptionKind,
    ConsumptionPlan,
    IncompatibleUnits,
    InsufficientIngredient,
    MissingIngredient,
    PantryItem,
    SufficiencyOk,
    SufficiencyResult,
    UnitPolicy,
)
from pantry_pace.domain.recipes import RecipeIngredient
from pantry_pace.domain.units import Quantity
from pantry_pace.services.matching import IngredientMatcher, exact_then_substring
from pantry_pace.services.units import conversion_multiplier, normalize

DEFAULT_EPSILON = 0.001


def check_sufficiency(
    pantry: Sequence[PantryItem],
    requirements: Sequence[RecipeIngredient],
    *,
    matcher: IngredientMatcher = exact_then_substring,
    unit_policy: UnitPolicy = UnitPolicy.RAW_QUANTITY,
) -> SufficiencyResult:
    """Return whether the pantry covers every requirement.

    Stops at the first requirement that cannot be served. Requirements are
    checked independently against the snapshot as given: two requirements
    resolving to the same item each only need to fit the full stock, while
    plan_consumption adds them up and may then delete the item.
    """
    for requirement in requirements:
        item = matcher(pantry, requirement.name)
        if item is None:
            return MissingIngredient(name=requirement.name)

        needed = Quantity(requirement.quantity, requirement.unit)
        have = normalize(item.quantity, item.unit)
        want = normalize(requirement.quantity, requirement.unit)
        if have.base_unit == want.base_unit:
            enough = have.base_quantity >= want.base_quantity
        elif unit_policy is UnitPolicy.REJECT:
            return IncompatibleUnits(
                name=requirement.name, needed=needed, available=item.amount
            )
        else:
            enough = item.quantity >= requirement.quantity

        if not enough:
            return InsufficientIngredient(
                name=requirement.name, needed=needed, available=item.amount
            )
    return SufficiencyOk()


def plan_consumption(
    pantry: Sequence[PantryItem],
    requirements: Sequence[RecipeIngredient],
    *,
    matcher: IngredientMatcher = exact_then_substring,
    unit_policy: UnitPolicy = UnitPolicy.RAW_QUANTITY,
    epsilon: float = DEFAULT_EPSILON,
) -> ConsumptionPlan:
    """Compute the pantry changes caused by cooking a recipe.

    Callers run check_sufficiency first. Unresolvable requirements are
    skipped here, and incompatible units under the REJECT policy leave the
    item untouched.
    """
    snapshot = list(pantry)
    remaining: dict[UUID, float] = {}
    touched: dict[UUID, PantryItem] = {}

    for requirement in requirements:
        item = matcher(snapshot, requirement.name)
        if item is None:
            continue
        current = remaining.get(item.id, item.quantity)

        have = normalize(item.quantity, item.unit)
        want = normalize(requirement.quantity, requirement.unit)
        if have.base_unit == want.base_unit:
            used = want.base_quantity / conversion_multiplier(item.unit)
        elif unit_policy is UnitPolicy.REJECT:
            continue
        else:
            used = requirement.quantity

        remaining[item.id] = current - used
        touched.setdefault(item.id, item)

    actions = []
    for item_id, item in touched.items():
        left = remaining[item_id]
        if left <= epsilon:
            actions.append(
                ConsumptionAction(
                    item_id=item_id,
                    name=item.name,
                    kind=ConsumptionKind.DELETE,
                    quantity=0.0,
                )
            )
        else:
            actions.append(
                ConsumptionAction(
                    item_id=item_id,
                    name=item.name,
                    kind=ConsumptionKind.UPDATE,
                    quantity=left,
                )
            )
    return ConsumptionPlan(actions=actions)


class PantryRepository(Protocol):
    """Persistence interface for pantry items."""

    def list_items(self, user_id: UUID) -> list[PantryItem]:
        """Return the user's pantry items."""

    def create_item(
        self, user_id: UUID, name: str, quantity: float, unit: str
    ) -> PantryItem:
        """Create a pantry item and return it."""

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> PantryItem:
        """Update one of the user's pantry items and return it."""

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete one of the user's pantry items."""


@dataclass
class PantryService:
    """Application service for pantry operations."""

    repository: PantryRepository
    matcher: IngredientMatcher = exact_then_substring
    unit_policy: UnitPolicy = UnitPolicy.RAW_QUANTITY

    def list_items(self, user_id: UUID) -> list[PantryItem]:
        """Return the user's pantry sorted by name."""
        return sorted(
            self.repository.list_items(user_id), key=lambda item: item.name.lower()
        )

    def add_item(
        self, user_id: UUID, name: str, quantity: float, unit: str = ""
    ) -> PantryItem:
        """Add a pantry item."""
        if quantity < 0:
            raise ValueError("Quantity must not be negative")
        return self.repository.create_item(user_id, name.strip(), quantity, unit.strip())

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> PantryItem:
        """Update a pantry item."""
        quantity = payload.get("quantity")
        if isinstance(quantity, int | float) and quantity < 0:
            raise ValueError("Quantity must not be negative")
        return self.repository.update_item(user_id, item_id, payload)

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete a pantry item."""
        self.repository.delete_item(user_id, item_id)

    def check(
        self, user_id: UUID, ingredients: Sequence[RecipeIngredient]
    ) -> SufficiencyResult:
        """Check a recipe's ingredients against the current pantry."""
        return check_sufficiency(
            self.repository.list_items(user_id),
            ingredients,
            matcher=self.matcher,
            unit_policy=self.unit_policy,
        )
