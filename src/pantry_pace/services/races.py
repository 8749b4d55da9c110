"""Race history service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from pantry_pace.domain.races import (
    CompletedRace,
    CompletionResult,
    UpcomingRace,
    YearStats,
)
from pantry_pace.domain.writes import WriteAction
from pantry_pace.services.batch import WriteBatchCommitter
from pantry_pace.services.race_stats import (
    ALL_TIME,
    available_years,
    compute_personal_records,
    compute_statistics,
    is_goal_beaten,
    is_new_personal_record,
    progress_series,
)

logger = logging.getLogger(__name__)

COMPLETED_TABLE = "completed_races"
UPCOMING_TABLE = "upcoming_races"


class RaceRepository(Protocol):
    """Persistence interface for completed and upcoming races."""

    def list_completed_races(self, user_id: UUID) -> list[CompletedRace]:
        """Return completed races, newest first."""

    def create_completed_race(
        self, user_id: UUID, payload: dict[str, object]
    ) -> CompletedRace:
        """Create a completed race and return it."""

    def update_completed_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> CompletedRace:
        """Update one of the user's completed races and return it."""

    def delete_completed_race(self, user_id: UUID, race_id: UUID) -> None:
        """Delete one of the user's completed races."""

    def list_upcoming_races(self, user_id: UUID) -> list[UpcomingRace]:
        """Return upcoming races, soonest first."""

    def get_upcoming_race(self, user_id: UUID, race_id: UUID) -> UpcomingRace | None:
        """Return one of the user's upcoming races by id, if present."""

    def create_upcoming_race(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UpcomingRace:
        """Create an upcoming race and return it."""

    def update_upcoming_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> UpcomingRace:
        """Update one of the user's upcoming races and return it."""

    def delete_upcoming_race(self, user_id: UUID, race_id: UUID) -> None:
        """Delete one of the user's upcoming races."""


@dataclass
class RaceService:
    """Application service for race history and statistics."""

    repository: RaceRepository
    committer: WriteBatchCommitter

    def list_completed(self, user_id: UUID) -> list[CompletedRace]:
        """Return completed races."""
        return self.repository.list_completed_races(user_id)

    def list_upcoming(self, user_id: UUID) -> list[UpcomingRace]:
        """Return upcoming races."""
        return self.repository.list_upcoming_races(user_id)

    def add_completed_race(  # noqa: PLR0913
        self,
        user_id: UUID,
        *,
        name: str,
        distance: str,
        time: str,
        race_date: date,
        notes: str = "",
        link: str = "",
    ) -> CompletionResult:
        """Log a finished race directly into history."""
        _require(name=name, distance=distance, time=time)
        records = compute_personal_records(self.list_completed(user_id))
        is_record = is_new_personal_record(distance, time, records)
        race = self.repository.create_completed_race(
            user_id,
            {
                "name": name.strip(),
                "distance": distance.strip(),
                "time": time.strip(),
                "date": race_date.isoformat(),
                "notes": notes,
                "link": link,
            },
        )
        return CompletionResult(race=race, is_new_record=is_record, goal_beaten=False)

    def update_completed_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> CompletedRace:
        """Edit a completed race."""
        return self.repository.update_completed_race(user_id, race_id, payload)

    def delete_completed_race(self, user_id: UUID, race_id: UUID) -> None:
        """Delete a completed race."""
        self.repository.delete_completed_race(user_id, race_id)

    def add_upcoming_race(  # noqa: PLR0913
        self,
        user_id: UUID,
        *,
        name: str,
        distance: str,
        race_date: date,
        goal_time: str = "",
        link: str = "",
        info: str = "",
    ) -> UpcomingRace:
        """Schedule an upcoming race."""
        _require(name=name, distance=distance)
        return self.repository.create_upcoming_race(
            user_id,
            {
                "name": name.strip(),
                "distance": distance.strip(),
                "date": race_date.isoformat(),
                "goal_time": goal_time.strip(),
                "link": link,
                "info": info,
            },
        )

    def update_upcoming_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> UpcomingRace:
        """Edit an upcoming race."""
        return self.repository.update_upcoming_race(user_id, race_id, payload)

    def delete_upcoming_race(self, user_id: UUID, race_id: UUID) -> None:
        """Delete an upcoming race."""
        self.repository.delete_upcoming_race(user_id, race_id)

    def complete_upcoming_race(
        self, user_id: UUID, race_id: UUID, time: str, notes: str = ""
    ) -> CompletionResult:
        """Move an upcoming race into history with its finish time.

        The new completed race and the removal of the upcoming entry are
        committed together. There is no way back to upcoming. Only the
        owner's races can be completed; any other id is reported as missing.
        """
        _require(time=time)
        upcoming = self.repository.get_upcoming_race(user_id, race_id)
        if upcoming is None:
            raise LookupError(f"Upcoming race {race_id} not found")

        records = compute_personal_records(self.list_completed(user_id))
        race = CompletedRace(
            id=uuid4(),
            name=upcoming.name,
            distance=upcoming.distance,
            time=time.strip(),
            date=upcoming.date,
            notes=notes,
            link=upcoming.link,
        )
        self.committer.commit(
            user_id,
            [
                WriteAction.create(
                    COMPLETED_TABLE,
                    {
                        "id": str(race.id),
                        "user_id": str(user_id),
                        "name": race.name,
                        "distance": race.distance,
                        "time": race.time,
                        "date": race.date.isoformat() if race.date else None,
                        "notes": race.notes,
                        "link": race.link,
                    },
                ),
                WriteAction.delete(UPCOMING_TABLE, str(upcoming.id)),
            ],
        )
        result = CompletionResult(
            race=race,
            is_new_record=is_new_personal_record(race.distance, race.time, records),
            goal_beaten=is_goal_beaten(race.time, upcoming.goal_time),
        )
        logger.info(
            "Completed race %s (record=%s, goal=%s)",
            race.id,
            result.is_new_record,
            result.goal_beaten,
        )
        return result

    def statistics(self, user_id: UUID, year: int | str | None = ALL_TIME) -> YearStats:
        """Return stats for a year, or all time."""
        return compute_statistics(self.list_completed(user_id), year)

    def personal_records(self, user_id: UUID) -> dict[str, CompletedRace | None]:
        """Return personal records per distance."""
        return compute_personal_records(self.list_completed(user_id))

    def available_years(self, user_id: UUID) -> list[int]:
        """Return the years that have races."""
        return available_years(self.list_completed(user_id))

    def progress(
        self, user_id: UUID, distance: str
    ) -> list[tuple[date, float, CompletedRace]]:
        """Return the time progression for one distance."""
        return progress_series(self.list_completed(user_id), distance)


def _require(**fields: str) -> None:
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
