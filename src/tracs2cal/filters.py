"""Narrowing classified events to the set the user wants in their calendar."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from .classify import CalendarEvent


class FilterMode(str, Enum):
    ALL = "all"
    WORKDAYS = "workdays"
    DAYSOFF = "daysoff"


_MODE_NOUNS = {
    FilterMode.ALL: "events",
    FilterMode.WORKDAYS: "work shifts and STUD days",
    FilterMode.DAYSOFF: "rest days and annual leave",
}


def describe_mode(mode: FilterMode | str) -> str:
    return _MODE_NOUNS[FilterMode(mode)]


def filter_events(events: Iterable[CalendarEvent], mode: FilterMode | str) -> List[CalendarEvent]:
    """Return the events matching ``mode`` in their original order.

    Raises ValueError for an unknown mode.
    """
    mode = FilterMode(mode)
    if mode is FilterMode.WORKDAYS:
        return [event for event in events if not event.kind.is_day_off]
    if mode is FilterMode.DAYSOFF:
        return [event for event in events if event.kind.is_day_off]
    return list(events)
