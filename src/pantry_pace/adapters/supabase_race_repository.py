"""Supabase repository for completed and upcoming races."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from pantry_pace.domain.races import CompletedRace, UpcomingRace
from pantry_pace.services.races import RaceRepository

_COMPLETED_COLUMNS = "id, name, distance, time, date, notes, link"
_UPCOMING_COLUMNS = "id, name, distance, date, goal_time, link, info"


@dataclass
class SupabaseRaceRepository(RaceRepository):
    """Supabase implementation for race history."""

    client: Client

    def list_completed_races(self, user_id: UUID) -> list[CompletedRace]:
        """Return completed races, newest first."""
        response = (
            self.client.table("completed_races")
            .select(_COMPLETED_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .execute()
        )
        return [_parse_completed(row) for row in response.data or []]

    def create_completed_race(
        self, user_id: UUID, payload: dict[str, object]
    ) -> CompletedRace:
        """Create a completed race row."""
        response = (
            self.client.table("completed_races")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create completed race")
        return _parse_completed(response.data[0])

    def update_completed_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> CompletedRace:
        """Update a completed race row owned by the user."""
        response = (
            self.client.table("completed_races")
            .update(payload)
            .eq("id", str(race_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise LookupError(f"Completed race {race_id} not found")
        return _parse_completed(response.data[0])

    def delete_completed_race(self, user_id: UUID, race_id: UUID) -> None:
        """Delete a completed race row owned by the user."""
        self.client.table("completed_races").delete().eq("id", str(race_id)).eq(
            "user_id", str(user_id)
        ).execute()

    def list_upcoming_races(self, user_id: UUID) -> list[UpcomingRace]:
        """Return upcoming races, soonest first."""
        response = (
            self.client.table("upcoming_races")
            .select(_UPCOMING_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=False)
            .execute()
        )
        return [_parse_upcoming(row) for row in response.data or []]

    def get_upcoming_race(self, user_id: UUID, race_id: UUID) -> UpcomingRace | None:
        """Return one of the user's upcoming races by id."""
        response = (
            self.client.table("upcoming_races")
            .select(_UPCOMING_COLUMNS)
            .eq("id", str(race_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_upcoming(response.data[0])

    def create_upcoming_race(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UpcomingRace:
        """Create an upcoming race row."""
        response = (
            self.client.table("upcoming_races")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create upcoming race")
        return _parse_upcoming(response.data[0])

    def update_upcoming_race(
        self, user_id: UUID, race_id: UUID, payload: dict[str, object]
    ) -> UpcomingRace:
        """Update an upcoming race row owned by the user."""
        response = (
            self.client.table("upcoming_races")
            .update(payload)
            .eq("id", str(race_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise LookupError(f"Upcoming race {race_id} not found")
        return _parse_upcoming(response.data[0])

    def delete_upcoming_race(self, user_id: UUID, race_id: UUID) -> None:
        """Delete an upcoming race row owned by the user."""
        self.client.table("upcoming_races").delete().eq("id", str(race_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_date(raw: object) -> date | None:
    if isinstance(raw, str) and raw:
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            return None
    return None


def _parse_completed(row: dict[str, object]) -> CompletedRace:
    return CompletedRace(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        distance=str(row.get("distance") or ""),
        time=str(row.get("time") or ""),
        date=_parse_date(row.get("date")),
        notes=str(row.get("notes") or ""),
        link=str(row.get("link") or ""),
    )


def _parse_upcoming(row: dict[str, object]) -> UpcomingRace:
    return UpcomingRace(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        distance=str(row.get("distance") or ""),
        date=_parse_date(row.get("date")),
        goal_time=str(row.get("goal_time") or ""),
        link=str(row.get("link") or ""),
        info=str(row.get("info") or ""),
    )
