"""TRACS roster export to calendar conversion toolkit."""

from .classify import CalendarEvent, ConversionResult, EventKind, convert
from .cli import roster_csv_to_ics
from .filters import FilterMode, filter_events
from .ics import events_to_ics

__all__ = [
    "CalendarEvent",
    "ConversionResult",
    "EventKind",
    "FilterMode",
    "convert",
    "events_to_ics",
    "filter_events",
    "roster_csv_to_ics",
]
