"""Race statistics and personal records.

Everything here is recomputed from the full race collection on each call;
there is no incremental bookkeeping.
"""

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from pantry_pace.domain.races import CompletedRace, DistanceStats, YearStats

ALL_TIME = "All"
UNKNOWN_DISTANCE = "N/A"
STANDARD_DISTANCES = ("5k", "10k", "1/2 Marathon", "Marathon")

KM_TO_MILES = 0.621371
METERS_PER_MILE = 1609.34

_DISTANCE_MILES = {
    "5k": 3.10686,
    "10k": 6.21371,
    "1/2 marathon": 13.1094,
    "half marathon": 13.1094,
    "marathon": 26.2188,
}

_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def time_to_seconds(time: str | None) -> float:
    """Parse H:M:S, M:S or S into seconds, 0 when unparseable."""
    if not time or not isinstance(time, str):
        return 0
    try:
        parts = [float(part) if part.strip() else 0.0 for part in time.split(":")]
    except ValueError:
        return 0
    if len(parts) == 3:  # noqa: PLR2004
        seconds = parts[0] * 3600 + parts[1] * 60 + parts[2]
    elif len(parts) == 2:  # noqa: PLR2004
        seconds = parts[0] * 60 + parts[1]
    elif len(parts) == 1:
        seconds = parts[0]
    else:
        return 0
    return seconds if math.isfinite(seconds) else 0


def distance_to_miles(distance: str | None) -> float:
    """Convert a distance label into miles, 0 when no number is present."""
    if not distance or not isinstance(distance, str):
        return 0
    label = distance.lower().strip()
    if label in _DISTANCE_MILES:
        return _DISTANCE_MILES[label]

    match = _NUMBER.search(label)
    if not match:
        return 0
    value = float(match.group())

    if "kilometer" in label or "kilometre" in label or "km" in label:
        return value * KM_TO_MILES
    if "meter" in label or "metre" in label:
        return value / METERS_PER_MILE
    if "mile" in label or "mi" in label:
        return value
    if "k" in label:
        return value * KM_TO_MILES
    return value


def format_seconds(total_seconds: float) -> str | None:
    """Format seconds as H:MM:SS or M:SS, None for non-positive values."""
    if not math.isfinite(total_seconds) or total_seconds <= 0:
        return None
    whole = round(total_seconds)
    hours, remainder = divmod(whole, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def pace_per_mile(total_seconds: float, total_miles: float) -> str | None:
    """Format a minutes:seconds per mile pace, None when undefined."""
    if total_seconds == 0 or total_miles == 0:
        return None
    whole = round(total_seconds / total_miles)
    minutes, seconds = divmod(whole, 60)
    return f"{minutes}:{seconds:02d}"


def format_pace(time: str | None, distance: str | None) -> str | None:
    """Return the per-mile pace for a race time over a distance label."""
    return pace_per_mile(time_to_seconds(time), distance_to_miles(distance))


def is_standard_distance(distance: str | None) -> bool:
    return (distance or "").strip().lower() in {
        label.lower() for label in STANDARD_DISTANCES
    }


def compute_statistics(
    races: Sequence[CompletedRace], year: int | str | None = ALL_TIME
) -> YearStats:
    """Aggregate totals and per-distance figures for a year or all time."""
    selected = _parse_year(year)
    if selected is None:
        filtered = list(races)
    else:
        filtered = [race for race in races if race.date and race.date.year == selected]

    total_miles = sum(distance_to_miles(race.distance) for race in filtered)
    total_seconds = sum(time_to_seconds(race.time) for race in filtered)

    buckets: dict[str, list[CompletedRace]] = {}
    for race in filtered:
        buckets.setdefault(_label(race), []).append(race)

    distance_stats: dict[str, DistanceStats] = {}
    for distance in _with_standard(buckets):
        relevant = buckets.get(distance, [])
        if relevant:
            distance_stats[distance] = _distance_stats(distance, relevant)
        elif distance in STANDARD_DISTANCES:
            distance_stats[distance] = DistanceStats(
                distance=distance,
                best_time=None,
                best_race=None,
                improvement=None,
                improvement_seconds=0,
            )

    races_by_distance = sorted(
        ((distance, _by_date_desc(bucket)) for distance, bucket in buckets.items()),
        key=lambda entry: len(entry[1]),
        reverse=True,
    )

    return YearStats(
        year=selected,
        total_races=len(filtered),
        total_miles=total_miles,
        total_seconds=total_seconds,
        total_time=format_seconds(total_seconds),
        pace=pace_per_mile(total_seconds, total_miles),
        distance_stats=distance_stats,
        races_by_distance=races_by_distance,
    )


def compute_personal_records(
    races: Sequence[CompletedRace],
) -> dict[str, CompletedRace | None]:
    """Return the fastest race per distance label over the whole history.

    Standard distances are always present, mapped to None until run. Ties
    keep the race that comes first in the collection.
    """
    records: dict[str, CompletedRace | None] = dict.fromkeys(STANDARD_DISTANCES)
    for race in races:
        distance = _label(race)
        best = records.get(distance)
        if best is None or time_to_seconds(race.time) < time_to_seconds(best.time):
            records[distance] = race
    return records


def is_new_personal_record(
    distance: str, time: str, records: Mapping[str, CompletedRace | None]
) -> bool:
    """Return whether a finish time sets a record worth celebrating.

    Only standard distances qualify; custom distances still show up in the
    records table but never trigger a new record.
    """
    if not is_standard_distance(distance):
        return False
    current = _record_for(distance, records)
    return current is None or time_to_seconds(time) < time_to_seconds(current.time)


def is_goal_beaten(time: str, goal_time: str | None) -> bool:
    """Return whether a finish time is strictly faster than a set goal."""
    goal_seconds = time_to_seconds(goal_time)
    return goal_seconds > 0 and time_to_seconds(time) < goal_seconds


def available_years(races: Iterable[CompletedRace]) -> list[int]:
    """Return the distinct years with races, newest first."""
    return sorted({race.date.year for race in races if race.date}, reverse=True)


def progress_series(
    races: Iterable[CompletedRace], distance: str | None = None
) -> list[tuple[date, float, CompletedRace]]:
    """Return dated, timed races in chronological order for a chart."""
    points = []
    for race in races:
        if distance is not None and race.distance != distance:
            continue
        seconds = time_to_seconds(race.time)
        if race.date is None or seconds <= 0:
            continue
        points.append((race.date, seconds, race))
    return sorted(points, key=lambda point: point[0])


def _distance_stats(distance: str, races: list[CompletedRace]) -> DistanceStats:
    by_time = sorted(races, key=lambda race: time_to_seconds(race.time))
    best = by_time[0]
    gap = 0.0
    if len(by_time) > 1:
        gap = time_to_seconds(by_time[-1].time) - time_to_seconds(best.time)
    return DistanceStats(
        distance=distance,
        best_time=best.time,
        best_race=best,
        improvement=format_seconds(gap) if gap > 0 else None,
        improvement_seconds=max(gap, 0),
    )


def _record_for(
    distance: str, records: Mapping[str, CompletedRace | None]
) -> CompletedRace | None:
    wanted = distance.strip().lower()
    candidates = [
        race
        for label, race in records.items()
        if race is not None and label.strip().lower() == wanted
    ]
    if not candidates:
        return None
    # labels differing only in case count as one distance
    return min(candidates, key=lambda race: time_to_seconds(race.time))


def _with_standard(buckets: Mapping[str, list[CompletedRace]]) -> list[str]:
    labels = list(STANDARD_DISTANCES)
    labels.extend(label for label in buckets if label not in STANDARD_DISTANCES)
    return labels


def _by_date_desc(races: list[CompletedRace]) -> list[CompletedRace]:
    return sorted(races, key=lambda race: race.date or date.min, reverse=True)


def _label(race: CompletedRace) -> str:
    return race.distance or UNKNOWN_DISTANCE


def _parse_year(year: int | str | None) -> int | None:
    if year is None or year == ALL_TIME:
        return None
    return int(year)
