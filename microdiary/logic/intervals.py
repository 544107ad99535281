# microdiary/logic/intervals.py

from typing import Iterable, List, Protocol

from pydantic import BaseModel, ConfigDict, Field

from microdiary.logic.clock import format_minutes, parse_time


class TimeSpan(Protocol):
    """Anything with HH:MM `start_time` and `end_time` attributes."""
    start_time: str
    end_time: str


class Interval(BaseModel):
    """An occupied span within one day. `start_time < end_time` is not enforced here."""
    model_config = ConfigDict(frozen=True)

    start_time: str
    end_time: str


class Gap(BaseModel):
    """An uncovered span of a day, serialized as {"from": ..., "to": ...}."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: str = Field(..., alias="from")
    end: str = Field(..., alias="to")


def overlaps(a: TimeSpan, b: TimeSpan) -> bool:
    """
    Return True if two intervals overlap.

    Intervals are half-open, so back-to-back entries (one ends exactly when the
    other starts) do not overlap.
    """
    return (
        parse_time(a.start_time) < parse_time(b.end_time)
        and parse_time(a.end_time) > parse_time(b.start_time)
    )


def find_gaps(
    intervals: Iterable[TimeSpan],
    day_start: str = "06:00",
    day_end: str = "23:59",
    min_gap_minutes: int = 15,
) -> List[Gap]:
    """
    Find uncovered spans of at least `min_gap_minutes` within [day_start, day_end].

    Intervals may be unsorted and may overlap or contain each other. A day with
    no intervals has no gaps: coverage is only measured between entries.
    """
    ordered = sorted(intervals, key=lambda i: parse_time(i.start_time))
    if not ordered:
        return []

    gaps: List[Gap] = []
    cursor = parse_time(day_start)

    for interval in ordered:
        start = parse_time(interval.start_time)
        if start - cursor >= min_gap_minutes:
            gaps.append(Gap(start=format_minutes(cursor), end=format_minutes(start)))
        # Never move backwards for entries contained in an earlier one
        cursor = max(cursor, parse_time(interval.end_time))

    day_end_minutes = parse_time(day_end)
    if day_end_minutes - cursor >= min_gap_minutes:
        gaps.append(Gap(start=format_minutes(cursor), end=format_minutes(day_end_minutes)))

    return gaps
