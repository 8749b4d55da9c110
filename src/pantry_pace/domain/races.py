"""Domain models for race tracking."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class CompletedRace:
    """A finished race with its result."""

    id: UUID
    name: str
    distance: str
    time: str
    date: date | None
    notes: str = ""
    link: str = ""


@dataclass(frozen=True)
class UpcomingRace:
    """A scheduled race that has not been run yet."""

    id: UUID
    name: str
    distance: str
    date: date | None
    goal_time: str = ""
    link: str = ""
    info: str = ""


@dataclass(frozen=True)
class DistanceStats:
    """Best time and improvement for one distance in a period."""

    distance: str
    best_time: str | None
    best_race: CompletedRace | None
    improvement: str | None
    improvement_seconds: float


@dataclass(frozen=True)
class YearStats:
    """Aggregates for a selected year or all time."""

    year: int | None
    total_races: int
    total_miles: float
    total_seconds: float
    total_time: str | None
    pace: str | None
    distance_stats: dict[str, DistanceStats]
    races_by_distance: list[tuple[str, list[CompletedRace]]] = field(
        default_factory=list
    )


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of recording a finished race."""

    race: CompletedRace
    is_new_record: bool
    goal_beaten: bool
