"""Domain models for quantities and unit conversion."""

from dataclasses import dataclass
from enum import Enum


class UnitKind(str, Enum):
    """Physical dimension of a recognized unit."""

    MASS = "mass"
    VOLUME = "volume"


@dataclass(frozen=True)
class UnitConversion:
    """Conversion of a recognized unit label into the base unit."""

    kind: UnitKind
    multiplier: float


@dataclass(frozen=True)
class Quantity:
    """An amount paired with a free-form unit label."""

    amount: float
    unit: str = ""

    def __str__(self) -> str:
        amount = f"{self.amount:g}"
        return f"{amount} {self.unit}".strip()


@dataclass(frozen=True)
class NormalizedQuantity:
    """A quantity expressed in its base unit."""

    base_quantity: float
    base_unit: str
