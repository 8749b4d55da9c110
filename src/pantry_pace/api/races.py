"""Race history, statistics and personal record endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from pantry_pace.api.auth import require_token
from pantry_pace.api.models import (
    CompletedRaceIn,
    CompletedRacePatch,
    CompleteRaceRequest,
    UpcomingRaceIn,
    UpcomingRacePatch,
)
from pantry_pace.domain.races import CompletedRace, CompletionResult, YearStats
from pantry_pace.services.race_stats import ALL_TIME, format_pace

if TYPE_CHECKING:
    from pantry_pace.containers import AppContainer

router = APIRouter(
    prefix="/users/{user_id}/races",
    tags=["races"],
    dependencies=[Depends(require_token)],
)


@router.get("/completed")
async def list_completed(user_id: UUID, request: Request) -> dict[str, object]:
    """Return race history, newest first."""
    container: AppContainer = request.app.state.container
    races = container.race_service.list_completed(user_id)
    return {"races": [_race_payload(race) for race in races]}


@router.post("/completed", status_code=status.HTTP_201_CREATED)
async def add_completed(
    user_id: UUID, body: CompletedRaceIn, request: Request
) -> dict[str, object]:
    """Log a finished race."""
    container: AppContainer = request.app.state.container
    result = container.race_service.add_completed_race(
        user_id,
        name=body.name,
        distance=body.distance,
        time=body.time,
        race_date=body.date,
        notes=body.notes,
        link=body.link,
    )
    return _completion_payload(result)


@router.patch("/completed/{race_id}")
async def update_completed(
    user_id: UUID, race_id: UUID, body: CompletedRacePatch, request: Request
) -> dict[str, object]:
    """Edit a finished race."""
    container: AppContainer = request.app.state.container
    race = container.race_service.update_completed_race(
        user_id, race_id, body.model_dump(mode="json", exclude_none=True)
    )
    return _race_payload(race)


@router.delete("/completed/{race_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_completed(
    user_id: UUID, race_id: UUID, request: Request
) -> Response:
    """Delete a finished race."""
    container: AppContainer = request.app.state.container
    container.race_service.delete_completed_race(user_id, race_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/upcoming")
async def list_upcoming(user_id: UUID, request: Request) -> dict[str, object]:
    """Return scheduled races, soonest first."""
    container: AppContainer = request.app.state.container
    races = container.race_service.list_upcoming(user_id)
    return {
        "races": [
            {**asdict(race), "goal_pace": format_pace(race.goal_time, race.distance)}
            for race in races
        ]
    }


@router.post("/upcoming", status_code=status.HTTP_201_CREATED)
async def add_upcoming(
    user_id: UUID, body: UpcomingRaceIn, request: Request
) -> dict[str, object]:
    """Schedule a race."""
    container: AppContainer = request.app.state.container
    race = container.race_service.add_upcoming_race(
        user_id,
        name=body.name,
        distance=body.distance,
        race_date=body.date,
        goal_time=body.goal_time,
        link=body.link,
        info=body.info,
    )
    return asdict(race)


@router.patch("/upcoming/{race_id}")
async def update_upcoming(
    user_id: UUID, race_id: UUID, body: UpcomingRacePatch, request: Request
) -> dict[str, object]:
    """Edit a scheduled race."""
    container: AppContainer = request.app.state.container
    race = container.race_service.update_upcoming_race(
        user_id, race_id, body.model_dump(mode="json", exclude_none=True)
    )
    return asdict(race)


@router.delete("/upcoming/{race_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_upcoming(
    user_id: UUID, race_id: UUID, request: Request
) -> Response:
    """Delete a scheduled race."""
    container: AppContainer = request.app.state.container
    container.race_service.delete_upcoming_race(user_id, race_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/upcoming/{race_id}/complete")
async def complete_upcoming(
    user_id: UUID, race_id: UUID, body: CompleteRaceRequest, request: Request
) -> dict[str, object]:
    """Record the finish time of a scheduled race."""
    container: AppContainer = request.app.state.container
    result = container.race_service.complete_upcoming_race(
        user_id, race_id, body.time, body.notes
    )
    return _completion_payload(result)


@router.get("/stats")
async def race_stats(
    user_id: UUID, request: Request, year: str = ALL_TIME
) -> dict[str, object]:
    """Return totals and per-distance figures for a year or all time."""
    container: AppContainer = request.app.state.container
    stats = container.race_service.statistics(user_id, year)
    return _stats_payload(stats)


@router.get("/records")
async def personal_records(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the fastest race per distance."""
    container: AppContainer = request.app.state.container
    records = container.race_service.personal_records(user_id)
    return {
        "records": {
            distance: _race_payload(race) if race else None
            for distance, race in records.items()
        }
    }


@router.get("/years")
async def race_years(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the years that have races."""
    container: AppContainer = request.app.state.container
    return {"years": container.race_service.available_years(user_id)}


@router.get("/progress")
async def race_progress(
    user_id: UUID, distance: str, request: Request
) -> dict[str, object]:
    """Return finish times for one distance in date order."""
    container: AppContainer = request.app.state.container
    points = container.race_service.progress(user_id, distance)
    return {
        "distance": distance,
        "points": [
            {"date": day.isoformat(), "seconds": seconds, "name": race.name}
            for day, seconds, race in points
        ],
    }


def _race_payload(race: CompletedRace) -> dict[str, object]:
    return {**asdict(race), "pace": format_pace(race.time, race.distance)}


def _completion_payload(result: CompletionResult) -> dict[str, object]:
    return {
        "race": _race_payload(result.race),
        "is_new_record": result.is_new_record,
        "goal_beaten": result.goal_beaten,
    }


def _stats_payload(stats: YearStats) -> dict[str, object]:
    return {
        "year": stats.year if stats.year is not None else ALL_TIME,
        "total_races": stats.total_races,
        "total_miles": round(stats.total_miles, 2),
        "total_time": stats.total_time,
        "pace": stats.pace,
        "distance_stats": {
            distance: {
                "best_time": entry.best_time,
                "improvement": entry.improvement,
                "pace": format_pace(entry.best_time, distance)
                if entry.best_time
                else None,
            }
            for distance, entry in stats.distance_stats.items()
        },
        "races_by_distance": [
            {"distance": distance, "races": [_race_payload(race) for race in races]}
            for distance, races in stats.races_by_distance
        ],
    }
