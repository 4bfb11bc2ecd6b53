"""Converter state and the transitions the UI drives it through.

Every function takes a ``ConverterState`` and returns a new one; the
conversion pipeline itself stays in ``classify``, ``filters`` and ``ics``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .classify import CalendarEvent, convert
from .config import CALENDAR_NAME, PREVIEW_ROWS
from .errors import CsvParseError, EmptyResultError, InputFormatError
from .filters import FilterMode, describe_mode, filter_events
from .ics import events_to_ics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Status:
    kind: str  # "success" or "error"
    title: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.kind == "error"


@dataclass(frozen=True)
class ConverterState:
    file_name: Optional[str] = None
    events: Tuple[CalendarEvent, ...] = ()
    filtered: Tuple[CalendarEvent, ...] = ()
    filter_mode: FilterMode = FilterMode.ALL
    skipped_rows: int = 0
    section: str = "upload"
    status: Optional[Status] = None


def failed(file_name: str, title: str, message: str) -> ConverterState:
    """A fresh state carrying only a blocking error; earlier data is dropped."""
    return ConverterState(file_name=file_name, status=Status("error", title, message))


def upload(state: ConverterState, file_name: str, content: str) -> ConverterState:
    """Load a roster export, replacing whatever was loaded before."""
    if not file_name.lower().endswith(".csv"):
        return replace(
            state,
            status=Status(
                "error",
                "Please select a valid CSV file",
                "The file you selected is not a CSV file. Please try again with a TRACS Enterprise CSV export.",
            ),
        )

    try:
        result = convert(content)
    except CsvParseError as exc:
        logger.error("Error parsing %s: %s", file_name, exc)
        return failed(file_name, "Error Parsing CSV", f"There was a problem parsing your file: {exc}")
    except InputFormatError as exc:
        logger.error("Error processing %s: %s", file_name, exc)
        return failed(file_name, "Error Processing CSV", f"There was a problem processing your file: {exc}")

    events = tuple(result.events)
    return ConverterState(
        file_name=file_name,
        events=events,
        filtered=events,
        filter_mode=FilterMode.ALL,
        skipped_rows=result.skipped_rows,
        section="options",
    )


def choose_filter(state: ConverterState, mode: FilterMode | str) -> ConverterState:
    if not state.events:
        return state
    mode = FilterMode(mode)
    return replace(state, filter_mode=mode, filtered=tuple(filter_events(state.events, mode)))


def preview(state: ConverterState, limit: int = PREVIEW_ROWS) -> Tuple[CalendarEvent, ...]:
    return state.filtered[:limit]


def export(state: ConverterState, calendar_name: str = CALENDAR_NAME) -> Tuple[ConverterState, Optional[str]]:
    """Serialize the filtered events; returns the new state and the ICS text (None on failure)."""
    try:
        ics_content = events_to_ics(state.filtered, calendar_name=calendar_name)
    except EmptyResultError:
        return replace(state, status=Status("error", "No Data Available", "Please upload a file first.")), None

    count = len(state.filtered)
    message = f"Your iCal file with {count} {describe_mode(state.filter_mode)} is ready to download."
    if state.skipped_rows:
        message += f" {state.skipped_rows} roster rows could not be read and were skipped."
    return replace(state, status=Status("success", "Calendar File Ready!", message)), ics_content
